from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hostel_billing.api.v1.router import router as api_v1_router
from hostel_billing.config.settings import settings
from hostel_billing.core.exceptions import BaseAppException
from hostel_billing.core.logging import get_logger
from hostel_billing.core.middleware import register_middlewares
from hostel_billing.db.init_db import init_db

logger = get_logger(__name__)


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    """Render billing errors as {"error": {...}} with their own status code."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"{exc.__class__.__name__}: {exc.message}",
        extra={
            "error_code": exc.error_code.value,
            "status_code": exc.status_code,
            "path": str(request.url.path),
        },
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ORIGINS != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middlewares(app)

    app.add_exception_handler(BaseAppException, app_exception_handler)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    # Dev/demo schema creation; production schemas are migrated separately
    @app.on_event("startup")
    async def on_startup() -> None:
        if not settings.is_production():
            init_db()

    return app


app = create_app()

# hostel_billing/core/middleware.py
"""
Core middleware registration for the FastAPI application.

Request IDs and access logging for the billing API.
"""
from __future__ import annotations

import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from hostel_billing.core.logging import get_logger, request_id as request_id_ctx

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns every request an ID, reusing an upstream one when present.

    The ID is stored on request.state, bound to the logging context for the
    duration of the request, and echoed back in the X-Request-ID header.
    """

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())

        request.state.request_id = request_id
        token = request_id_ctx.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)

        response.headers[self.header_name] = request_id
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request with its status and duration.

    Unhandled exceptions are logged with their traceback and re-raised.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        fields = {"method": request.method, "path": request.url.path}

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"Unhandled error on {request.method} {request.url.path}: {exc}",
                exc_info=True,
                extra={**fields, "error_type": type(exc).__name__},
            )
            raise

        elapsed = time.perf_counter() - started
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"

        log = logger.info if response.status_code < 500 else logger.warning
        log(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={**fields, "status_code": response.status_code, "duration_ms": round(elapsed * 1000, 2)},
        )
        return response


def register_middlewares(app: FastAPI) -> None:
    """
    Register the core middlewares on the application.

    The last middleware added wraps the others, so the request ID is bound
    before the access log line is written.
    """
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)


__all__ = [
    "REQUEST_ID_HEADER",
    "RequestIDMiddleware",
    "AccessLogMiddleware",
    "register_middlewares",
]

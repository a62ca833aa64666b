"""
API v1 Router - Main Entry Point
Aggregates all v1 billing endpoints.
"""
from fastapi import APIRouter

from hostel_billing import __version__
from hostel_billing.api.v1 import ledger, students
from hostel_billing.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    responses={
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"}
    }
)

router.include_router(students.router)
router.include_router(ledger.router)


@router.get("/health", tags=["System Health"])
def api_health_check():
    """API health check"""
    return {
        "status": "healthy",
        "version": __version__,
        "api_version": "v1",
        "description": "Hostel Billing Engine API v1",
    }


logger.info("API v1 router initialized", extra={"total_routes": len(router.routes)})

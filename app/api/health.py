import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.database import engine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "",
    summary="Health check",
    description="Basic health check endpoint."
)
def health_check():
    """Simple health check."""
    return {"status": "healthy"}


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check if the database is reachable."
)
def readiness_check():
    """
    Readiness check for the database connection.

    Returns `ready` when a trivial query succeeds, `not_ready` otherwise,
    with the connection error attached.
    """
    checks = {"database": False}

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            checks["database"] = True
    except SQLAlchemyError as e:
        logger.warning(f"Readiness check failed: {e}")
        checks["database_error"] = str(e)

    return {
        "status": "ready" if checks["database"] else "not_ready",
        "checks": checks
    }

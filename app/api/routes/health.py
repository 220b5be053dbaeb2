"""
Liveness and health endpoints.
"""
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

API_VERSION = "1.0.0"


@router.get("/")
def root():
    return {
        "message": "Server is running!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for deployment monitoring.

    Always 200; ``status`` is "degraded" when the database does not answer.
    """
    status = "healthy"
    try:
        db.execute(text("SELECT 1"))
        db_status = "connected"
    except SQLAlchemyError as e:
        logger.warning(f"Health check database error: {e}")
        db_status = "error"
        status = "degraded"

    return {
        "status": status,
        "database": db_status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": API_VERSION,
    }

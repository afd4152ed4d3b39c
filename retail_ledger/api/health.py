"""
Health check endpoint.

Used by monitoring and humans to verify the application is
running and the key-value database is reachable.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from retail_ledger.models.base import get_db

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Return application health status including storage connectivity.

    If the database cannot answer a trivial query the service
    reports itself degraded; the in-memory book keeps working.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception:
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "retail-ledger",
        "database": db_status,
    }

"""
Health check endpoint.

Used by load balancers, monitoring systems, and humans
to verify the application is running and responsive.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.orm import Session

from family_allowance.models.base import get_db

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(request: Request, db: Session = Depends(get_db)):
    """
    Return application health status including database
    connectivity and whether the due-order worker is running.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception:
        db_status = "unhealthy"

    worker = getattr(request.app.state, "worker", None)
    if worker is None:
        worker_status = "disabled"
    elif worker.running:
        worker_status = "running"
    else:
        worker_status = "stopped"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "family-allowance",
        "database": db_status,
        "worker": worker_status,
    }

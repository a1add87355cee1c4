"""Health check endpoint."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.orm import Session

from src.db.database import get_db

router = APIRouter()


@router.get("/health")
def health_check(request: Request, db: Session = Depends(get_db)) -> dict[str, str]:
    """Return application, database and item catalog status."""
    service = getattr(request.app.state, "item_service", None)
    catalog = "loaded" if service is not None and service.registry.loaded else "pending"
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ok", "database": "connected", "catalog": catalog}
    except Exception:
        return {"status": "error", "database": "disconnected", "catalog": catalog}

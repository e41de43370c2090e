"""Unauthenticated health check: store connectivity and frontend build presence."""

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.static import SPA_INDEX, get_public_dir
from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    public_dir: Annotated[Path, Depends(get_public_dir)],
) -> HealthResponse:
    """Used by load balancers and deploy checks; always 200, details in the body."""
    return HealthResponse(
        environment=settings.NODE_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
        frontend_built=(public_dir / SPA_INDEX).is_file(),
    )

"""Health check endpoint with database connectivity and schema version."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pushups.core.config import Settings, get_settings
from pushups.core.database import check_db_connected, get_db
from pushups.core.migrations import get_schema_version
from pushups.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """
    Return service health status, database connectivity and schema version.
    Used by load balancers and monitoring.
    """
    if not check_db_connected(db):
        return HealthResponse(status="ok", environment=settings.APP_ENV, database="disconnected")
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database="connected",
        schema_version=get_schema_version(db.connection()),
    )

"""GET /health: database reachability and the migration revision the database is on. Public."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from remix.core.config import Settings
from remix.core.database import check_db_connected, get_db, get_schema_revision
from remix.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(request: Request, db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    settings: Settings = request.app.state.settings
    if not check_db_connected(db):
        return HealthResponse(
            status="degraded",
            environment=settings.APP_ENV,
            apiPrefix=settings.API_PREFIX,
            database="disconnected",
        )
    return HealthResponse(
        environment=settings.APP_ENV,
        apiPrefix=settings.API_PREFIX,
        database="connected",
        schemaRevision=get_schema_revision(db),
    )

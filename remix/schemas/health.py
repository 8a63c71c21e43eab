"""Response body for GET /health."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service status plus what a deploy check needs: database reachability and applied migration."""

    status: Literal["ok", "degraded"] = Field(
        default="ok", description="degraded when the database cannot be reached"
    )
    environment: Literal["dev", "test", "prod"]
    apiPrefix: str = Field(default="", description="Prefix every route is mounted under")
    database: Literal["connected", "disconnected"]
    schemaRevision: str | None = Field(
        default=None,
        description="alembic revision applied to the database; null when unmigrated or unreachable",
    )

"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service status plus whether the report store answered a trivial query."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: Literal["dev", "prod"] = Field(description="Current APP_ENV")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Report store connectivity when the check is performed",
    )

"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus the two things the shop cannot run without: the store and the SPA build."""

    status: Literal["ok"] = "ok"
    environment: str = Field(description="NODE_ENV the process runs with")
    database: Literal["connected", "disconnected"]
    frontend_built: bool = Field(description="True when PUBLIC_DIR contains index.html")

"""Shared response envelopes."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Confirmation body for writes (register, create, update, delete)."""

    message: str = Field(..., description="Human-readable confirmation")

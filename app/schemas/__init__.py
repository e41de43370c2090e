"""Pydantic request/response schemas."""

from app.schemas.auth import CredentialsRequest, CurrentUser, TokenResponse
from app.schemas.catalog import (
    DeviceFields,
    DeviceItem,
    DeviceListResponse,
    ServiceFields,
    ServiceItem,
    ServiceListResponse,
)
from app.schemas.common import MessageResponse
from app.schemas.health import HealthResponse

__all__ = [
    "CredentialsRequest",
    "CurrentUser",
    "DeviceFields",
    "DeviceItem",
    "DeviceListResponse",
    "HealthResponse",
    "MessageResponse",
    "ServiceFields",
    "ServiceItem",
    "ServiceListResponse",
    "TokenResponse",
]

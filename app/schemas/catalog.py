"""Schemas for the devices and services catalog: writable fields, rows and pages."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class CatalogFields(BaseModel):
    """
    Base for writable resource fields.

    Form submissions send every value as a string; an empty string means the
    field was left blank and is stored as NULL. ``image`` is only read on
    update, where it carries the existing reference when no new file is sent.
    """

    image: str | None = Field(default=None, description="Existing image reference (update only)")

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def column_values(self) -> dict[str, Any]:
        """Values for every writable column except image."""
        return self.model_dump(exclude={"image"})


class DeviceFields(CatalogFields):
    """Writable fields of a device."""

    name: str | None = None
    model: str | None = None
    description: str | None = None
    price: float | None = None
    status: str | None = Field(default=None, description="Repair state, e.g. received, in_repair, done")
    client_name: str | None = None
    client_phone: str | None = None


class ServiceFields(CatalogFields):
    """Writable fields of a service."""

    title: str | None = None
    description: str | None = None
    price: float | None = None
    duration: str | None = None
    category: str | None = None
    is_available: bool | None = None
    technician: str | None = None


class DeviceItem(BaseModel):
    """Device row as returned by the API."""

    id: int
    name: str | None = None
    model: str | None = None
    description: str | None = None
    image: str | None = None
    price: float | None = None
    status: str | None = None
    client_name: str | None = None
    client_phone: str | None = None

    class Config:
        from_attributes = True


class ServiceItem(BaseModel):
    """Service row as returned by the API."""

    id: int
    title: str | None = None
    description: str | None = None
    price: float | None = None
    image: str | None = None
    duration: str | None = None
    category: str | None = None
    is_available: bool | None = None
    technician: str | None = None

    class Config:
        from_attributes = True


class DeviceListResponse(BaseModel):
    """One page of devices plus the unpaginated total."""

    devices: list[DeviceItem]
    total: int = Field(..., ge=0, description="Row count of the whole table")
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)


class ServiceListResponse(BaseModel):
    """One page of services plus the unpaginated total."""

    services: list[ServiceItem]
    total: int = Field(..., ge=0, description="Row count of the whole table")
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)

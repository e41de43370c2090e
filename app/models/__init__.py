"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.device import Device
from app.models.service import Service
from app.models.user import User

__all__ = ["Base", "Device", "Service", "User"]

"""ORM model for repair services offered by the shop."""

from sqlalchemy import Boolean, Column, Integer, Numeric, String, Text

from app.models.base import Base


class Service(Base):
    """A priced repair service with its assigned technician."""

    __tablename__ = "services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=True)
    image = Column(String(512), nullable=True)
    duration = Column(String(64), nullable=True)
    category = Column(String(128), nullable=True)
    is_available = Column(Boolean, nullable=True)
    technician = Column(String(255), nullable=True)

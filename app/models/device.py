"""ORM model for devices brought in for repair."""

from sqlalchemy import Column, Integer, Numeric, String, Text

from app.models.base import Base


class Device(Base):
    """
    A client's device and its repair state.

    Every column except id is nullable: updates replace the whole row.
    """

    __tablename__ = "devices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=True)
    model = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    image = Column(String(512), nullable=True)
    price = Column(Numeric(10, 2), nullable=True)
    status = Column(String(64), nullable=True)
    client_name = Column(String(255), nullable=True)
    client_phone = Column(String(64), nullable=True)

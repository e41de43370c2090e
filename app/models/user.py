"""ORM model for shop accounts (registration, login and roles)."""

from sqlalchemy import Column, Integer, String

from app.models.base import Base


class User(Base):
    """
    Account that can log in and manage the catalog.

    role: 'user' (self-registered) or 'admin' (provisioned from the CLI).
    The ``password`` column holds a bcrypt hash, never the plain password.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column("password", String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")

"""Shared fixtures: in-memory SQLite store and a TestClient wired to it."""

import tempfile
import unittest
from datetime import UTC, datetime, timedelta
from pathlib import Path

import jwt
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.static import get_public_dir, get_upload_store
from app.core.config import settings
from app.core.database import get_db
from app.core.security import create_access_token
from app.main import app
from app.models import Base
from app.services.storage import UploadStore

PLACEHOLDER = "/uploads/placeholder.jpg"


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with all tables, shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def bearer(user_id: int = 1, role: str = "user") -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}


def expired_bearer(user_id: int = 1, role: str = "user") -> dict[str, str]:
    payload = {
        "id": user_id,
        "role": role,
        "iat": datetime.now(UTC) - timedelta(hours=2),
        "exp": datetime.now(UTC) - timedelta(hours=1),
    }
    token = jwt.encode(
        payload, settings.JWT_SECRET.get_secret_value(), algorithm=settings.JWT_ALGORITHM
    )
    return {"Authorization": f"Bearer {token}"}


class ApiTestCase(unittest.TestCase):
    """Runs the app against a throwaway database, uploads dir and public dir."""

    raise_server_exceptions = True

    def setUp(self) -> None:
        self.SessionTesting = make_session_factory()
        self._tmp = tempfile.TemporaryDirectory()
        self.uploads_dir = Path(self._tmp.name) / "Uploads"
        self.public_dir = Path(self._tmp.name) / "public"
        self.public_dir.mkdir()

        def override_get_db():
            db = self.SessionTesting()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_upload_store] = lambda: UploadStore(
            self.uploads_dir, placeholder=PLACEHOLDER
        )
        app.dependency_overrides[get_public_dir] = lambda: self.public_dir
        self.client = TestClient(app, raise_server_exceptions=self.raise_server_exceptions)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self._tmp.cleanup()

    def session(self):
        return self.SessionTesting()

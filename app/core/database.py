"""MySQL connection pool and session management."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import Settings, settings


def connect_args_for(config: Settings) -> dict[str, Any]:
    """Driver connect arguments: connect timeout and optional TLS for MySQL, none otherwise."""
    if config.database_url.get_backend_name() != "mysql":
        return {}
    connect_args: dict[str, Any] = {"connect_timeout": config.MYSQL_CONNECT_TIMEOUT_SEC}
    if config.MYSQL_SSL:
        # Encrypted but unverified, like most managed MySQL hosts expect.
        connect_args["ssl"] = {"check_hostname": False, "verify_mode": False}
    return connect_args


def build_engine(config: Settings) -> Engine:
    """Create the process-wide engine; MySQL gets a pool capped at MYSQL_POOL_SIZE."""
    url = config.database_url
    options: dict[str, Any] = {
        "pool_pre_ping": True,
        "echo": config.DEBUG,
        "connect_args": connect_args_for(config),
    }
    if url.get_backend_name() == "mysql":
        options.update(pool_size=config.MYSQL_POOL_SIZE, max_overflow=0)
    return create_engine(url, **options)


engine = build_engine(settings)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False

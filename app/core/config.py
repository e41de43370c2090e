"""Application configuration loaded from environment variables."""

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

# Allowed URL schemes for a DATABASE_URL override (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "mysql://",
    "mysql+pymysql://",
    "sqlite://",
    "sqlite+pysqlite://",
)


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # "production" runs the frontend build before serving and turns CORS off
    NODE_ENV: str = "development"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # MySQL connection pool
    MYSQL_HOST: str = "localhost"
    MYSQL_PORT: int = 3306
    MYSQL_USER: str = "root"
    MYSQL_PASSWORD: SecretStr = SecretStr("")
    MYSQL_DATABASE: str = "repair_shop"
    MYSQL_SSL: bool = True
    MYSQL_POOL_SIZE: int = 10
    MYSQL_CONNECT_TIMEOUT_SEC: int = 10
    # Full SQLAlchemy URL; when set it replaces the MYSQL_* connection values
    DATABASE_URL: str | None = None

    # JWT authentication
    JWT_SECRET: SecretStr = SecretStr("change-me-in-production")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60

    # Uploaded images and the bundled frontend
    UPLOADS_DIR: str = "Uploads"
    PLACEHOLDER_IMAGE: str = "/uploads/placeholder.jpg"
    PUBLIC_DIR: str = "public"
    FRONTEND_BUILD_COMMAND: str = "npm run build"
    CORS_DEV_ORIGIN: str = "http://localhost:8000"

    @property
    def is_production(self) -> bool:
        return self.NODE_ENV.strip().lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        """Origins allowed to call the API from a browser."""
        if self.is_production:
            return []
        return [self.CORS_DEV_ORIGIN]

    @property
    def database_url(self) -> URL:
        """SQLAlchemy URL for the store: DATABASE_URL if set, else built from MYSQL_*."""
        if self.DATABASE_URL:
            return make_url(self.DATABASE_URL)
        return URL.create(
            "mysql+pymysql",
            username=self.MYSQL_USER,
            password=self.MYSQL_PASSWORD.get_secret_value() or None,
            host=self.MYSQL_HOST,
            port=self.MYSQL_PORT,
            database=self.MYSQL_DATABASE,
        )

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        if not any(v.strip().startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a MySQL or SQLite URL (e.g. mysql+pymysql:// or sqlite://)"
            )
        return v.strip()

    @field_validator("MYSQL_DATABASE")
    @classmethod
    def validate_mysql_database(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("MYSQL_DATABASE must be set and non-empty")
        return v.strip()

    @field_validator("PORT", "MYSQL_PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("Ports must be between 1 and 65535")
        return v

    @field_validator("MYSQL_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v: int) -> int:
        if v < 1 or v > 100:
            raise ValueError("MYSQL_POOL_SIZE must be between 1 and 100")
        return v

    @field_validator("MYSQL_CONNECT_TIMEOUT_SEC")
    @classmethod
    def validate_connect_timeout(cls, v: int) -> int:
        if v < 1 or v > 120:
            raise ValueError(
                "MYSQL_CONNECT_TIMEOUT_SEC must be between 1 and 120"
            )
        return v

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v

    @field_validator("PLACEHOLDER_IMAGE")
    @classmethod
    def validate_placeholder_image(cls, v: str) -> str:
        if not v.startswith("/uploads/"):
            raise ValueError("PLACEHOLDER_IMAGE must be a path under /uploads/")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()

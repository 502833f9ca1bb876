"""
Configuration helpers for the clinic backend.

Settings are read once from environment variables (storage backend, data
directory, database URL, CORS origins, admin principal) so that routers and
services never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

STORAGE_BACKENDS = ("file", "sql")

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://127.0.0.1:3000",
)


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str = "dev"
    storage_backend: str = "file"
    data_dir: str = "data"
    database_url: str = "sqlite:///./clinic.db"
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    admin_identifier: str = "admin"
    admin_password: str = "admin123"
    admin_password_hash: str = ""
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 5000


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _csv(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
        if value is None:
            return default
        return tuple(item.strip() for item in value.split(",") if item.strip())

    backend = (os.getenv("STORAGE_BACKEND") or "file").strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise RuntimeError(f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got {backend!r}.")

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        storage_backend=backend,
        data_dir=os.getenv("DATA_DIR", "data"),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./clinic.db"),
        cors_origins=_csv(os.getenv("CORS_ORIGINS"), DEFAULT_CORS_ORIGINS),
        admin_identifier=os.getenv("ADMIN_IDENTIFIER", "admin"),
        admin_password=os.getenv("ADMIN_PASSWORD", "admin123"),
        admin_password_hash=os.getenv("ADMIN_PASSWORD_HASH", ""),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "5000"), 5000),
    )

"""Centralized configuration management for the marketplace backend."""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load a local .env before the settings singleton is built so every consumer
# importing :mod:`marketplace.settings` observes the same environment.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_SQLITE_DATABASE_URL = "sqlite+aiosqlite:///./data/marketplace.db"
POSTGRES_ASYNC_PREFIX = "postgresql+psycopg://"
POSTGRES_SYNC_PREFIXES = ("postgres://", "postgresql://")
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_IMAGE_UPLOAD_PREFIX = "products"
DEFAULT_IMAGE_UPLOAD_EXPIRES_SECONDS = 300


def _normalize_origin(origin: str) -> str:
    """Return the origin stripped of whitespace and trailing slashes."""

    return origin.strip().rstrip("/")


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    Besides the raw environment values the class exposes derived helpers
    (normalized database URL, numeric log level, CORS origin list) so callers
    never repeat parsing logic.
    """

    _explicit_cors_allow_origins: bool = PrivateAttr(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def __init__(self, **values: object) -> None:
        """Capture explicit overrides prior to delegating to ``BaseSettings``."""

        normalized_keys = {str(key).lower() for key in values}
        super().__init__(**values)
        self._explicit_cors_allow_origins = (
            "cors_allow_origins_raw" in normalized_keys
            or "cors_allow_origins" in normalized_keys
        )
        cors_env = os.getenv("CORS_ALLOW_ORIGINS")
        if cors_env is not None and cors_env.strip():
            self._explicit_cors_allow_origins = True

    database_url: str | None = Field(
        default=None,
        alias="DATABASE_URL",
        description=(
            "Full SQLAlchemy-compatible database URL. Postgres URLs supplied in"
            " sync format (postgres:// or postgresql://) are coerced into the"
            " async psycopg driver string at runtime."
        ),
    )
    use_sqlite: bool = Field(
        default=False,
        alias="USE_SQLITE",
        description="Force SQLite usage regardless of DATABASE_URL.",
    )
    cors_allow_origins_raw: str | None = Field(
        default=None,
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated list of additional CORS origins.",
    )
    cors_allow_origin_regex: str | None = Field(
        default=None,
        alias="CORS_ALLOW_ORIGIN_REGEX",
        description="Optional regular expression evaluated by the CORS middleware.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )
    slow_query_threshold: float = Field(
        default=0.1,
        alias="SLOW_QUERY_THRESHOLD",
        description="Seconds after which a query is logged as slow.",
    )
    image_bucket: str | None = Field(
        default=None,
        alias="IMAGE_BUCKET",
        description="S3 bucket receiving product image uploads.",
    )
    aws_region: str | None = Field(
        default=None,
        alias="AWS_REGION",
        description="Region handed to the boto3 S3 client.",
    )
    image_upload_prefix: str = Field(
        default=DEFAULT_IMAGE_UPLOAD_PREFIX,
        alias="IMAGE_UPLOAD_PREFIX",
        description="Key prefix under which uploaded images are stored.",
    )
    image_upload_expires_seconds: int = Field(
        default=DEFAULT_IMAGE_UPLOAD_EXPIRES_SECONDS,
        alias="IMAGE_UPLOAD_EXPIRES_SECONDS",
        ge=1,
        description="Lifetime of issued presigned upload URLs.",
    )

    @property
    def resolved_database_url(self) -> str:
        """Return the async-compatible database URL after applying fallbacks."""

        if self.use_sqlite or not self.database_url:
            return DEFAULT_SQLITE_DATABASE_URL

        url = self.database_url.strip()

        for prefix in POSTGRES_SYNC_PREFIXES:
            if url.startswith(prefix):
                return url.replace(prefix, POSTGRES_ASYNC_PREFIX, 1)

        if url.startswith(POSTGRES_ASYNC_PREFIX) or url.startswith("sqlite+aiosqlite://"):
            return url

        raise RuntimeError(
            f"Expected a PostgreSQL connection string or SQLite fallback, received: {url}"
        )

    @property
    def database_type(self) -> str:
        """Return ``sqlite`` when using SQLite otherwise ``postgresql``."""

        if self.resolved_database_url.startswith("sqlite"):
            return "sqlite"
        return "postgresql"

    @property
    def cors_allow_origins(self) -> list[str]:
        """Return normalised CORS origins supplied via environment variables."""

        if not self.cors_allow_origins_raw:
            return []

        origins = [
            _normalize_origin(origin)
            for origin in self.cors_allow_origins_raw.split(",")
            if origin.strip()
        ]
        return [origin for origin in origins if origin]

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []

        if not self._explicit_cors_allow_origins and not self.cors_allow_origins:
            warnings.append(
                "CORS_ALLOW_ORIGINS is not set - using default localhost origins only "
                "(may cause CORS issues in production)"
            )

        if not self.image_bucket:
            warnings.append(
                "IMAGE_BUCKET is not set - presigned image upload URLs cannot be issued"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_IMAGE_UPLOAD_EXPIRES_SECONDS",
    "DEFAULT_IMAGE_UPLOAD_PREFIX",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_SQLITE_DATABASE_URL",
    "POSTGRES_ASYNC_PREFIX",
    "POSTGRES_SYNC_PREFIXES",
    "get_settings",
]

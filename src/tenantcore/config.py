"""Configuration contract for tenantcore.

Pydantic-validated settings shared by every service that embeds tenantcore
(logging, database, default tenant features, loader batching).

Direct os.environ/os.getenv usage is limited to load_config_from_env();
everything else receives a TenantCoreConfig instance.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .features.catalog import REQUIRED_FEATURES, get_feature_by_id


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


_ASYNC_DRIVERS = ("sqlite+aiosqlite://", "postgresql+asyncpg://", "postgresql+psycopg://")


class TenantCoreConfig(BaseModel):
    """Settings for the access layer and its storage.

    Services extend this model with their own settings.
    """

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )

    # Storage
    database_url: str = Field(
        default="sqlite+aiosqlite:///./var/db/tenantcore.sqlite",
        description="Async SQLAlchemy URL (sqlite+aiosqlite, postgresql+asyncpg, postgresql+psycopg)",
    )
    database_echo: bool = Field(
        default=False,
        description="Log every SQL statement",
    )

    # Features
    default_features: list[str] = Field(
        default_factory=lambda: list(REQUIRED_FEATURES),
        description="Features granted when a tenant record cannot be found",
    )

    # Batch loaders
    loader_max_batch_size: Optional[int] = Field(
        default=None,
        ge=1,
        description="Upper bound on keys per batch query (None = unbounded)",
    )

    # Service identification
    service_name: Optional[str] = Field(
        default=None,
        description="Service name used as logger name prefix",
    )

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Only async drivers are usable from the loaders."""
        if not v.startswith(_ASYNC_DRIVERS):
            raise ValueError(f"Database URL must use an async driver: one of {', '.join(_ASYNC_DRIVERS)}")
        return v

    @field_validator("default_features")
    @classmethod
    def validate_default_features(cls, v: list[str]) -> list[str]:
        """Default features must exist in the catalog."""
        unknown = [fid for fid in v if get_feature_by_id(fid) is None]
        if unknown:
            raise ValueError(f"Unknown default features: {', '.join(unknown)}")
        return list(dict.fromkeys(v))

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",  # Prevent accidental extra fields
    }


def load_config_from_env() -> TenantCoreConfig:
    """Load configuration from environment variables.

    Environment variables:
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_JSON: Use JSON log format (true/false, default: false)
    - DATABASE_URL: Async SQLAlchemy URL
    - DATABASE_ECHO: Echo SQL statements (true/false)
    - DEFAULT_FEATURES: Comma-separated feature ids for unknown tenants
    - LOADER_MAX_BATCH_SIZE: Maximum keys per batch query
    - SERVICE_NAME: Service name for logging

    Returns:
        TenantCoreConfig instance with values from environment or defaults.
    """
    import os

    truthy = ("true", "1", "yes", "on")

    values: dict[str, object] = {
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "log_json": os.getenv("LOG_JSON", "false").lower() in truthy,
        "database_echo": os.getenv("DATABASE_ECHO", "false").lower() in truthy,
        "service_name": os.getenv("SERVICE_NAME"),
    }

    database_url = os.getenv("DATABASE_URL")
    if database_url:
        values["database_url"] = database_url

    default_features_raw = os.getenv("DEFAULT_FEATURES", "")
    default_features = [f.strip() for f in default_features_raw.split(",") if f.strip()]
    if default_features:
        values["default_features"] = default_features

    max_batch = os.getenv("LOADER_MAX_BATCH_SIZE")
    if max_batch:
        values["loader_max_batch_size"] = int(max_batch)

    return TenantCoreConfig(**values)


__all__ = [
    "LogLevel",
    "TenantCoreConfig",
    "load_config_from_env",
]

"""
redis-cache-store — Configuration Schemas

Typed configuration models using Pydantic for validation.

The Redis connection options are forwarded to the client untouched; only the
adapter-level settings (default TTL and cacheability predicate) are validated.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def default_is_cacheable(value: Any) -> bool:
    """Accept every value except None."""
    return value is not None


class StoreConfig(BaseModel):
    """Adapter configuration for a single Redis-backed store."""

    ttl: int | None = Field(
        default=None,
        ge=0,
        description="Default TTL in milliseconds (None or 0 = no expiry)",
    )
    is_cacheable: Callable[[Any], bool] = Field(
        default=default_is_cacheable,
        description="Predicate rejecting values before they are written",
    )

    # Connection settings, passed through to redis.asyncio.Redis
    redis_url: str | None = Field(default=None, description="Redis connection URL")
    redis_options: dict[str, Any] = Field(
        default_factory=dict,
        description="Keyword arguments forwarded unmodified to the Redis client",
    )

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)

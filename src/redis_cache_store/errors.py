"""
redis-cache-store — Error Types

Defines the exception hierarchy for the cache store adapter.
Store errors inherit from CacheStoreError for consistent handling.

Backend failures are NOT part of this hierarchy: anything raised by the
Redis client propagates unchanged. BackendError is exported as an alias of
redis.exceptions.RedisError so callers can catch it without importing redis.
"""

from enum import Enum
from typing import Any

from redis.exceptions import RedisError

BackendError = RedisError


class ErrorCode(str, Enum):
    """Standard error codes for structured error reporting."""

    NOT_CACHEABLE = "NOT_CACHEABLE"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    BACKEND_ERROR = "BACKEND_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CacheStoreError(Exception):
    """Base exception for all cache store errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class NoCacheableError(CacheStoreError):
    """Raised when a value is rejected by the cacheability predicate before any write."""

    def __init__(self, value: Any, details: dict[str, Any] | None = None):
        message = f'"{value!r}" is not a cacheable value'
        super().__init__(message, details)
        self.value = value


class ConfigurationError(CacheStoreError):
    """Raised when configuration is invalid or a store cannot be built."""

    pass


def extract_error_code(error: Exception) -> ErrorCode:
    """
    Extract the appropriate ErrorCode from an exception.

    Args:
        error: Exception to categorize

    Returns:
        Matching ErrorCode
    """
    if isinstance(error, NoCacheableError):
        return ErrorCode.NOT_CACHEABLE

    if isinstance(error, ConfigurationError):
        return ErrorCode.CONFIGURATION_ERROR

    if isinstance(error, BackendError):
        return ErrorCode.BACKEND_ERROR

    return ErrorCode.INTERNAL_ERROR

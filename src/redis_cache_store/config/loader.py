"""
redis-cache-store — Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a singleton configuration instance used by the store factory.
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import StoreConfig

logger = logging.getLogger(__name__)

_config_instance: StoreConfig | None = None

# Environment variable -> (Redis client keyword, converter)
_REDIS_ENV_OPTIONS: dict[str, tuple[str, Any]] = {
    "REDIS_HOST": ("host", str),
    "REDIS_PORT": ("port", int),
    "REDIS_DB": ("db", int),
    "REDIS_USERNAME": ("username", str),
    "REDIS_PASSWORD": ("password", str),
    "REDIS_SOCKET_TIMEOUT": ("socket_timeout", float),
    "REDIS_MAX_CONNECTIONS": ("max_connections", int),
}


def _redis_options_from_env() -> dict[str, Any]:
    """Collect only the Redis options that are actually set in the environment."""
    options: dict[str, Any] = {}
    for env_name, (option, convert) in _REDIS_ENV_OPTIONS.items():
        raw = os.getenv(env_name)
        if raw is not None and raw != "":
            options[option] = convert(raw)
    return options


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> StoreConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in current directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated StoreConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    if env_file:
        env_path = Path(env_file)
    else:
        env_path = Path.cwd() / ".env"

    if env_path.exists():
        logger.info(f"Loading environment from {env_path}")
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                f"Failed to load .env file from {env_path}: {e}",
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    try:
        ttl = os.getenv("CACHE_TTL_MS")
        config_dict: dict[str, Any] = {
            "ttl": int(ttl) if ttl else None,
            "redis_url": os.getenv("REDIS_URL") or None,
            "redis_options": _redis_options_from_env(),
            "log_level": (os.getenv("LOG_LEVEL") or "INFO").upper(),
        }
    except ValueError as e:
        logger.error(
            f"Invalid numeric value in environment: {e}",
            extra={"error": str(e)},
        )
        raise ConfigurationError(
            f"Invalid numeric value in environment: {e}",
            details={"error": str(e)},
        ) from e

    try:
        _config_instance = StoreConfig(**config_dict)
        logger.info(
            "Configuration loaded successfully",
            extra={
                "redis_url_set": _config_instance.redis_url is not None,
                "ttl": _config_instance.ttl,
            },
        )
        return _config_instance
    except ValidationError as e:
        logger.error(
            f"Configuration validation failed: {e}",
            extra={"validation_errors": e.errors(), "config_dict_keys": list(config_dict.keys())},
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables.",
            details={"validation_errors": e.errors()},
        ) from e


def get_config() -> StoreConfig:
    """
    Get the current configuration instance, loading it on first access.

    Returns:
        Current StoreConfig instance
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> StoreConfig:
    """
    Force reload configuration.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded StoreConfig instance
    """
    return load_config(env_file=env_file, reload=True)

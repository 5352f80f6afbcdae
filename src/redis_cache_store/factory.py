"""
redis-cache-store — Store Factory

Named registry of RedisStore instances.

Key points:
- One store per name; repeated calls return the registered instance
- Configuration defaults to the env-loaded StoreConfig (see config.loader)
- close_all_stores() MUST be awaited during graceful shutdown

Examples:
    from redis_cache_store.factory import create_store, get_store

    store = create_store()  # uses REDIS_URL / REDIS_HOST ... from the environment

    from redis_cache_store.config import StoreConfig
    sessions = create_store(StoreConfig(redis_url="redis://localhost:6379/1", ttl=60_000), name="sessions")
"""

from __future__ import annotations

import logging

from .config import StoreConfig, get_config
from .errors import ConfigurationError, extract_error_code
from .store import RedisStore, redis_store

logger = logging.getLogger(__name__)

_store_instances: dict[str, RedisStore] = {}


def create_store(
    config: StoreConfig | None = None,
    name: str = "default",
) -> RedisStore:
    """
    Create a store instance, or return the one already registered under name.

    Args:
        config: Store configuration (uses global config if not provided)
        name: Store instance name

    Returns:
        Configured RedisStore

    Raises:
        ConfigurationError: If the store cannot be constructed
    """
    if name in _store_instances:
        logger.debug("Returning existing store instance: %s", name)
        return _store_instances[name]

    if config is None:
        config = get_config()

    logger.info("Creating store instance '%s'", name, extra={"store_name": name})

    try:
        store = redis_store(config)
    except Exception as e:
        logger.error(
            "Unexpected error creating store instance '%s': %s",
            name,
            e,
            extra={"store_name": name, "error": str(e), "error_code": extract_error_code(e).value},
            exc_info=True,
        )
        raise ConfigurationError(
            f"Failed to create store instance '{name}': {e}",
            details={"store_name": name, "error": str(e)},
        ) from e

    _store_instances[name] = store
    return store


def get_store(name: str = "default") -> RedisStore:
    """
    Get an existing store by name, creating it from global config if missing.

    Args:
        name: Store instance name

    Returns:
        RedisStore instance
    """
    if name not in _store_instances:
        logger.debug("Store instance '%s' not found, creating new instance", name)
        return create_store(name=name)

    return _store_instances[name]


async def close_all_stores() -> None:
    """Close every registered store and clear the registry."""
    if not _store_instances:
        logger.debug("No store instances to close")
        return

    logger.info("Closing %d store instance(s)...", len(_store_instances))

    for name, store in list(_store_instances.items()):
        try:
            await store.close()
            logger.info("Closed store instance: %s", name)
        except Exception as e:
            logger.error(
                "Error closing store instance '%s': %s",
                name,
                e,
                extra={"store_name": name, "error": str(e)},
                exc_info=True,
            )

    _store_instances.clear()
    logger.info("All store instances closed")


def reset_store_factory() -> None:
    """
    Drop all instance references without closing them.

    Warning: Only use this in testing contexts; use close_all_stores() otherwise.
    """
    count = len(_store_instances)
    _store_instances.clear()
    logger.debug("Reset store factory, cleared %d instance reference(s)", count)


def list_store_instances() -> list[str]:
    """List all registered store instance names."""
    return list(_store_instances.keys())

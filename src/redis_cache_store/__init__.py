"""
redis-cache-store — Redis Store for Cache Managers

JSON-serializing asynchronous cache store over redis-py, with optional
millisecond TTLs, atomic batch writes and pattern deletion.

Usage:
    from redis_cache_store import StoreConfig, redis_store

    store = redis_store(StoreConfig(ttl=5_000), host="localhost")
    await store.set("key", {"a": 1})
    value = await store.get("key")
"""

__version__ = "1.0.0"

from .config import StoreConfig, default_is_cacheable, load_config
from .errors import BackendError, CacheStoreError, ConfigurationError, NoCacheableError
from .factory import close_all_stores, create_store, get_store, list_store_instances, reset_store_factory
from .interface import CacheStore
from .logging_setup import configure_logging
from .store import RedisStore, avoid_no_cacheable, redis_ins_store, redis_store

__all__ = [
    # Builders
    "redis_store",
    "redis_ins_store",
    "avoid_no_cacheable",
    # Store
    "RedisStore",
    "CacheStore",
    # Factory
    "create_store",
    "get_store",
    "close_all_stores",
    "list_store_instances",
    "reset_store_factory",
    # Config
    "StoreConfig",
    "default_is_cacheable",
    "load_config",
    "configure_logging",
    # Errors
    "CacheStoreError",
    "NoCacheableError",
    "ConfigurationError",
    "BackendError",
]

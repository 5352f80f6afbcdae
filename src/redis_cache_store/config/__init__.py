"""
redis-cache-store — Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import get_config, load_config, reload_config
from .schemas import LogLevel, StoreConfig, default_is_cacheable

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    # Schemas
    "StoreConfig",
    "LogLevel",
    "default_is_cacheable",
]

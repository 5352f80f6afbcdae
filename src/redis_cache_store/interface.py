"""
redis-cache-store — Cache Store Interface

Defines the abstract contract a cache manager expects from a store.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any


class CacheStore(ABC):
    """
    Abstract base class for cache stores.

    Absent keys read back as None. TTL values are expressed in milliseconds;
    a TTL of None falls back to the store default and 0 disables expiry.
    """

    @property
    @abstractmethod
    def client(self) -> Any:
        """Underlying backend connection handle."""

    @abstractmethod
    def is_cacheable(self, value: Any) -> bool:
        """Return True if the value may be stored."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """
        Retrieve a value from the store.

        Args:
            key: Cache key

        Returns:
            Decoded value, or None if the key is absent
        """

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """
        Store a value.

        Args:
            key: Cache key
            value: JSON-serializable value
            ttl: Time-to-live in milliseconds (None = store default, 0 = no expiry)

        Raises:
            NoCacheableError: If the value fails the cacheability predicate
        """

    @abstractmethod
    async def mset(
        self,
        entries: Mapping[str, Any] | Iterable[tuple[str, Any]],
        ttl: int | None = None,
    ) -> None:
        """
        Store several values atomically.

        Args:
            entries: Mapping or iterable of (key, value) pairs
            ttl: Time-to-live in milliseconds applied to every entry

        Raises:
            NoCacheableError: If any value fails the cacheability predicate
        """

    @abstractmethod
    async def mget(self, *keys: str) -> list[Any | None]:
        """
        Retrieve several values, preserving the order of keys.

        Returns:
            One decoded value or None per requested key
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a key; a key containing '*' also deletes every match."""

    @abstractmethod
    async def mdel(self, *keys: str) -> None:
        """Delete several keys; absent keys are ignored."""

    @abstractmethod
    async def ttl(self, key: str) -> int:
        """Remaining time-to-live in milliseconds, or the backend sentinel."""

    @abstractmethod
    async def keys(self, pattern: str = "*") -> list[str]:
        """List keys matching a glob-style pattern."""

    @abstractmethod
    async def reset(self) -> None:
        """Clear the entire backend namespace the store is connected to."""

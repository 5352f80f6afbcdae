"""
redis-cache-store — Redis Store

Asynchronous cache store over a Redis connection with:
- JSON serialization for values
- Optional default TTL in milliseconds (SET ... PX)
- A cacheability predicate checked before every write
- Atomic batch writes (MSET, or MULTI/EXEC when a TTL applies)
- Pattern deletion through incremental SCAN + UNLINK

Requires: redis>=5.0 with asyncio support

Example:
    store = redis_store(StoreConfig(ttl=60_000), host="localhost", port=6379)
    await store.set("greeting", {"msg": "hello"})
    val = await store.get("greeting")
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Iterable, Mapping
from typing import Any, TypeVar

from redis.asyncio import Redis

from .config.schemas import StoreConfig
from .errors import NoCacheableError
from .interface import CacheStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

PATTERN_MARKER = "*"


class RedisStore(CacheStore):
    """
    Redis-backed cache store.

    Notes:
    - Keys are used as given; no namespace prefix is applied.
    - Values are stored as UTF-8 JSON strings.
    - TTL: None -> configured default, 0 -> no expiry, positive -> PX milliseconds.
    - Backend errors propagate unchanged; nothing here retries.
    """

    def __init__(
        self,
        client: Redis,
        config: StoreConfig | None = None,
        scan_count: int = 100,
    ) -> None:
        """
        Initialize the store around an existing client.

        Args:
            client: redis.asyncio.Redis instance (connects lazily)
            config: Adapter configuration (default TTL, cacheability predicate)
            scan_count: SCAN hint and UNLINK batch size for pattern deletion
        """
        self._client = client
        self._config = config or StoreConfig()
        self.default_ttl = self._config.ttl
        self.scan_count = max(1, int(scan_count))

    # ------------ Helpers ------------

    @staticmethod
    def _to_json(value: Any) -> str:
        """Serialize value to JSON string."""
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))

    @staticmethod
    def _from_json(data: str | bytes | None) -> Any | None:
        """Deserialize a stored JSON string. Returns None if data is None."""
        if data is None:
            return None
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return json.loads(data)

    @staticmethod
    def _to_str(key: str | bytes) -> str:
        return key.decode("utf-8") if isinstance(key, bytes) else key

    def _ttl_ms(self, ttl: int | None) -> int | None:
        """
        Normalize TTL:
        - None -> default TTL
        - 0 or negative -> no expiry (return None)
        - positive -> provided ttl
        """
        if ttl is None:
            ttl = self.default_ttl
        if ttl is None:
            return None
        ttl = int(ttl)
        return ttl if ttl > 0 else None

    def _check_cacheable(self, key: str, value: Any) -> None:
        if not self.is_cacheable(value):
            raise NoCacheableError(value, details={"key": key})

    # ------------ Accessors ------------

    @property
    def client(self) -> Redis:
        """The underlying Redis client."""
        return self._client

    def is_cacheable(self, value: Any) -> bool:
        """Apply the configured cacheability predicate."""
        return bool(self._config.is_cacheable(value))

    # ------------ Core Interface ------------

    async def get(self, key: str) -> Any | None:
        """Retrieve a value by key."""
        data = await self._client.get(key)
        return self._from_json(data)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store a value; with a TTL this is a single SET ... PX call."""
        self._check_cacheable(key, value)
        px = self._ttl_ms(ttl)
        await self._client.set(key, self._to_json(value), px=px)

    async def mset(
        self,
        entries: Mapping[str, Any] | Iterable[tuple[str, Any]],
        ttl: int | None = None,
    ) -> None:
        """
        Store multiple values atomically.

        Every value is checked before anything is sent. Without a TTL a single
        MSET is issued; with one, the SETs run inside a MULTI/EXEC transaction.
        """
        items = list(entries.items()) if isinstance(entries, Mapping) else list(entries)

        payloads: list[tuple[str, str]] = []
        for key, value in items:
            self._check_cacheable(key, value)
            payloads.append((key, self._to_json(value)))

        if not payloads:
            return

        px = self._ttl_ms(ttl)
        if px is None:
            await self._client.mset(dict(payloads))
            return

        pipe = self._client.pipeline(transaction=True)
        for key, payload in payloads:
            pipe.set(key, payload, px=px)
        await pipe.execute()

    async def mget(self, *keys: str) -> list[Any | None]:
        """Retrieve multiple values with MGET; order follows keys."""
        if not keys:
            return []

        values = await self._client.mget(list(keys))
        return [self._from_json(raw) for raw in values]

    async def mdel(self, *keys: str) -> None:
        """Delete multiple keys with a single DEL."""
        if not keys:
            return
        await self._client.delete(*keys)

    async def delete(self, key: str) -> None:
        """
        Delete a key.

        A key containing '*' is treated as a pattern first: every match found
        by SCAN is unlinked. The literal key is then deleted in all cases.
        """
        if PATTERN_MARKER in key:
            await self._delete_by_pattern(key)

        await self._client.delete(key)

    async def _delete_by_pattern(self, pattern: str) -> int:
        """UNLINK keys matching pattern in batches as SCAN yields them."""
        batch: list[str | bytes] = []
        deleted = 0

        async for match in self._client.scan_iter(match=pattern, count=self.scan_count):
            batch.append(match)
            if len(batch) >= self.scan_count:
                deleted += int(await self._client.unlink(*batch))
                batch = []

        if batch:
            deleted += int(await self._client.unlink(*batch))

        logger.debug(
            f"Pattern deletion removed {deleted} key(s)",
            extra={"pattern": pattern, "deleted": deleted},
        )
        return deleted

    async def ttl(self, key: str) -> int:
        """Remaining TTL in milliseconds (-1 = no expiry, -2 = absent)."""
        return int(await self._client.pttl(key))

    async def keys(self, pattern: str = "*") -> list[str]:
        """List keys matching a glob-style pattern."""
        found = await self._client.keys(pattern)
        return [self._to_str(k) for k in found]

    async def reset(self) -> None:
        """FLUSHDB: removes every key of the connected database, not only ours."""
        await self._client.flushdb()
        logger.info("Flushed Redis database")

    async def close(self) -> None:
        """Close the Redis client and release resources."""
        try:
            await self._client.aclose()
            logger.info("Closed Redis store")
        except Exception as e:
            logger.error(f"Error closing Redis client: {e}", extra={"error": str(e)}, exc_info=True)
        finally:
            try:
                await self._client.connection_pool.disconnect()
            except Exception as e:
                logger.warning(f"Error disconnecting Redis connection pool: {e}", extra={"error": str(e)})


def redis_ins_store(client: Redis, config: StoreConfig | None = None) -> RedisStore:
    """
    Wrap an existing Redis client in a store.

    Args:
        client: Configured redis.asyncio.Redis instance
        config: Adapter configuration

    Returns:
        RedisStore bound to the given client
    """
    return RedisStore(client, config)


def redis_store(config: StoreConfig | None = None, **redis_options: Any) -> RedisStore:
    """
    Create a Redis client and wrap it in a store.

    Connection options come from config.redis_options, overridden by keyword
    arguments, and are passed to the client without validation. When
    config.redis_url is set the client is built with Redis.from_url.
    Responses are decoded to str unless decode_responses is given explicitly.

    Args:
        config: Adapter configuration (default: StoreConfig())
        **redis_options: Extra keyword arguments for redis.asyncio.Redis

    Returns:
        RedisStore owning a new client
    """
    config = config or StoreConfig()
    options: dict[str, Any] = {"decode_responses": True, **config.redis_options, **redis_options}

    if config.redis_url:
        client = Redis.from_url(config.redis_url, **options)
    else:
        client = Redis(**options)

    logger.debug(
        "Created Redis store",
        extra={"from_url": config.redis_url is not None, "default_ttl": config.ttl},
    )
    return redis_ins_store(client, config)


async def avoid_no_cacheable(operation: Awaitable[T]) -> T | None:
    """
    Await a store operation, ignoring only NoCacheableError.

    Example:
        await avoid_no_cacheable(store.set("key", maybe_none))

    Returns:
        The operation's result, or None if the value was not cacheable
    """
    try:
        return await operation
    except NoCacheableError as e:
        logger.debug(f"Skipped non-cacheable value: {e.message}", extra=e.details)
        return None

"""Key/value response cache with TTLs.

Dashboards are cached as serialized JSON so repeated requests within the TTL
skip the upstream fan-out. The cache is a read-through accelerator only: any
backend error is logged and treated as a miss.
"""

import logging
import time
from typing import Awaitable, Callable, Protocol, TypeVar, runtime_checkable

import redis.asyncio as redis
from redis.exceptions import RedisError
from pydantic import BaseModel, ValidationError

from econdash.config import Settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "econdash"

ModelT = TypeVar("ModelT", bound=BaseModel)


def cache_key(*parts: str) -> str:
    return ":".join((KEY_PREFIX, *parts))


@runtime_checkable
class ResponseCache(Protocol):
    async def get(self, key: str) -> str | None:
        ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        ...


class RedisCache:
    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisCache":
        return cls(redis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> str | None:
        try:
            value = await self.client.get(key)
        except RedisError as e:
            logger.warning("Redis unavailable, skipping cache read for %s: %s", key, e)
            return None
        if value is not None:
            logger.debug("Cache hit: %s", key)
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self.client.setex(key, ttl_seconds, value)
        except RedisError as e:
            logger.warning("Failed to write cache for %s: %s", key, e)

    async def close(self) -> None:
        await self.client.aclose()


class InMemoryCache:
    """Process-local cache for development and tests."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[float, str]] = {}

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        now = self._clock()
        # Expired entries are dropped on every write, not only on read
        for stale in [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]:
            del self._entries[stale]
        self._entries[key] = (now + ttl_seconds, value)


def build_cache(settings: Settings) -> ResponseCache:
    if settings.cache_backend == "memory":
        return InMemoryCache()
    return RedisCache.from_url(settings.redis_url)


async def read_through(
    cache: ResponseCache,
    key: str,
    ttl_seconds: int,
    model_cls: type[ModelT],
    build: Callable[[], Awaitable[ModelT]],
) -> ModelT:
    """Return the cached model for `key`, or build, store and return it.

    Only successfully built models are written; exceptions from `build`
    propagate without touching the cache.
    """
    cached = await cache.get(key)
    if cached is not None:
        try:
            return model_cls.model_validate_json(cached)
        except ValidationError:
            logger.warning("Discarding unreadable cache entry for %s", key)

    result = await build()
    await cache.set(key, result.model_dump_json(by_alias=True), ttl_seconds)
    return result

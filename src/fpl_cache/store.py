"""CacheStore — thin async wrapper over the Redis client.

Every operation degrades instead of raising when Redis is unreachable:
reads behave like a miss, writes are dropped. Both are logged at warning.
The relational store stays the source of truth, so an unavailable cache
only costs latency.
"""

import logging
from collections.abc import Set
from typing import Any, Protocol

from redis.exceptions import RedisError

from src.fpl_cache.shapes import (
    Absent,
    CacheShape,
    HashShape,
    ListShape,
    SetShape,
    StringShape,
    UnsupportedShape,
)

logger = logging.getLogger(__name__)

_CACHE_ERRORS = (RedisError, OSError)


class CacheClientProtocol(Protocol):
    """Subset of ``redis.asyncio.Redis`` (decode_responses=True) used here."""

    async def get(self, name: str) -> str | None: ...

    async def set(self, name: str, value: str, ex: int | None = None) -> Any: ...

    async def type(self, name: str) -> str: ...

    async def hgetall(self, name: str) -> dict[str, str]: ...

    async def lrange(self, name: str, start: int, end: int) -> list[str]: ...

    async def smembers(self, name: str) -> Set[str]: ...

    async def keys(self, pattern: str) -> list[str]: ...


class CacheStore:
    def __init__(self, client: CacheClientProtocol) -> None:
        self._client = client

    async def get(self, key: str) -> str | None:
        try:
            return await self._client.get(key)
        except _CACHE_ERRORS as exc:
            logger.warning("Cache get failed, treating as miss: key=%s err=%s", key, exc)
            return None

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._client.set(key, value, ex=ttl_seconds)
        except _CACHE_ERRORS as exc:
            logger.warning("Cache set failed, skipping populate: key=%s err=%s", key, exc)

    async def keys(self, pattern: str) -> list[str]:
        try:
            return list(await self._client.keys(pattern))
        except _CACHE_ERRORS as exc:
            logger.warning("Cache key scan failed: pattern=%s err=%s", pattern, exc)
            return []

    async def read_shape(self, key: str) -> CacheShape:
        """Read a key according to its native type.

        A key that expires between TYPE and the typed read comes back as an
        empty container of that type, which decodes to no records.
        """
        try:
            type_name = await self._client.type(key)
            if type_name == "none":
                return Absent(key)
            if type_name == "string":
                text = await self._client.get(key)
                return Absent(key) if text is None else StringShape(key, text)
            if type_name == "hash":
                return HashShape(key, dict(await self._client.hgetall(key)))
            if type_name == "list":
                return ListShape(key, list(await self._client.lrange(key, 0, -1)))
            if type_name == "set":
                return SetShape(key, list(await self._client.smembers(key)))
            return UnsupportedShape(key, type_name)
        except _CACHE_ERRORS as exc:
            logger.warning("Cache read failed, treating as absent: key=%s err=%s", key, exc)
            return Absent(key)

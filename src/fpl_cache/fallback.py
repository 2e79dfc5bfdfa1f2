"""Best-effort reads: heterogeneous cache first, relational store second.

Order of attempts for ``read_with_fallback``:

  1. decode ``key`` in whatever shape it is stored
  2. (date-bucketed reads with no explicit date) decode the newest key
     under ``latest_prefix`` — producers can lag writing today's bucket,
     and yesterday's values beat an empty answer
  3. run the relational loader

An unsupported cache type stops at step 1 with an empty result: the key
exists, so the producer wrote something wrong, and querying the database
would hide that. Loader failures are logged and turned into ``[]``.
Nothing here writes to the cache.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from src.fpl_cache.decoder import DecodeResult, DecodeStatus, ItemParser, decode_shape
from src.fpl_cache.store import CacheStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheReader:
    """Reads keys of unknown native type through the shared decoder."""

    def __init__(self, store: CacheStore) -> None:
        self._store = store

    async def read(
        self,
        key: str,
        parse_item: ItemParser[T],
        *,
        sort_key: Callable[[T], Any] | None = None,
    ) -> DecodeResult[T]:
        shape = await self._store.read_shape(key)
        return decode_shape(shape, parse_item, sort_key=sort_key)

    async def latest_key(self, prefix: str) -> str | None:
        """Lexicographically greatest key under ``prefix`` (newest date token)."""
        keys = await self._store.keys(f"{prefix}*")
        return max(keys) if keys else None

    async def read_latest(
        self,
        prefix: str,
        parse_item: ItemParser[T],
        *,
        sort_key: Callable[[T], Any] | None = None,
    ) -> DecodeResult[T]:
        key = await self.latest_key(prefix)
        if key is None:
            return DecodeResult(prefix, DecodeStatus.ABSENT)
        return await self.read(key, parse_item, sort_key=sort_key)


async def read_with_fallback(
    reader: CacheReader,
    key: str,
    parse_item: ItemParser[T],
    loader: Callable[[], Awaitable[list[T]]],
    *,
    label: str,
    sort_key: Callable[[T], Any] | None = None,
    latest_prefix: str | None = None,
) -> list[T]:
    result = await reader.read(key, parse_item, sort_key=sort_key)
    if result.status is DecodeStatus.FOUND:
        return result.records
    if result.status is DecodeStatus.UNSUPPORTED:
        return []

    if latest_prefix is not None:
        latest = await reader.read_latest(latest_prefix, parse_item, sort_key=sort_key)
        if latest.status is DecodeStatus.FOUND:
            logger.info(
                "Requested %s key missing, serving most recent bucket: key=%s served=%s",
                label,
                key,
                latest.key,
            )
            return latest.records

    logger.info("No %s in cache, querying database: key=%s", label, key)
    try:
        return await loader()
    except Exception:
        logger.exception("Database fallback failed for %s: key=%s", label, key)
        return []

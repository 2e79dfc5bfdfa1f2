"""ReadThroughCache — generic get-or-populate over CacheStore.

    hit   → decode stored JSON with the caller's TypeAdapter, return it
    miss  → await loader(), store JSON with TTL, return it
    bad   → stored JSON that fails to decode is treated as a miss

A loader returning None ("not found") is passed through and never cached.

Single-flight: with ``single_flight=True`` concurrent misses for the same key
inside this process await one shared loader task. Callers await it through
``asyncio.shield``: a cancelled caller stops waiting, but the load runs to
completion (and populates the cache) for everyone else. Across processes the
last write wins, which is harmless because every population is derived
from the same source rows.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from pydantic import TypeAdapter, ValidationError

from src.fpl_cache.store import CacheStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ReadThroughCache:
    def __init__(self, store: CacheStore, *, single_flight: bool = True) -> None:
        self._store = store
        self._single_flight = single_flight
        self._inflight: dict[str, asyncio.Task] = {}

    @property
    def store(self) -> CacheStore:
        return self._store

    async def get_or_populate(
        self,
        key: str,
        loader: Callable[[], Awaitable[T | None]],
        ttl_seconds: int,
        adapter: TypeAdapter[T],
    ) -> T | None:
        cached = await self._store.get(key)
        if cached is not None:
            try:
                return adapter.validate_json(cached)
            except ValidationError as exc:
                logger.warning(
                    "Discarding undecodable cache entry: key=%s errors=%d",
                    key,
                    exc.error_count(),
                )

        if not self._single_flight:
            return await self._populate(key, loader, ttl_seconds, adapter)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._populate(key, loader, ttl_seconds, adapter))
            self._inflight[key] = task
            task.add_done_callback(lambda done: self._release(key, done))
        return await asyncio.shield(task)

    def _release(self, key: str, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        # Mark any failure retrieved; every awaiter may already be gone.
        if not task.cancelled():
            task.exception()

    async def _populate(
        self,
        key: str,
        loader: Callable[[], Awaitable[T | None]],
        ttl_seconds: int,
        adapter: TypeAdapter[T],
    ) -> T | None:
        value = await loader()
        if value is None:
            return None
        payload = adapter.dump_json(value, by_alias=True).decode()
        await self._store.set(key, payload, ttl_seconds)
        return value

"""Shared test fixtures."""

import fnmatch
from collections.abc import Set
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.fpl_cache.accessor import ReadThroughCache
from src.fpl_cache.fallback import CacheReader
from src.fpl_cache.store import CacheStore
from src.main import app


class FakeRedis:
    """In-memory stand-in for redis.asyncio.Redis(decode_responses=True).

    Only the commands the cache layer issues are implemented. ``set_calls``
    records every SET so tests can count cache populations.
    """

    def __init__(self) -> None:
        self.data: dict[str, tuple[str, object]] = {}
        self.set_calls: list[tuple[str, str, int | None]] = []

    # seeding helpers
    def seed_string(self, key: str, value: str) -> None:
        self.data[key] = ("string", value)

    def seed_hash(self, key: str, fields: dict[str, str]) -> None:
        self.data[key] = ("hash", dict(fields))

    def seed_list(self, key: str, items: list[str]) -> None:
        self.data[key] = ("list", list(items))

    def seed_set(self, key: str, members: list[str]) -> None:
        self.data[key] = ("set", set(members))

    def seed_zset(self, key: str, members: dict[str, float]) -> None:
        self.data[key] = ("zset", dict(members))

    # redis API
    async def get(self, name: str) -> str | None:
        entry = self.data.get(name)
        if entry is None or entry[0] != "string":
            return None
        return entry[1]  # type: ignore[return-value]

    async def set(self, name: str, value: str, ex: int | None = None) -> bool:
        self.set_calls.append((name, value, ex))
        self.data[name] = ("string", value)
        return True

    async def type(self, name: str) -> str:
        entry = self.data.get(name)
        return entry[0] if entry else "none"

    async def hgetall(self, name: str) -> dict[str, str]:
        entry = self.data.get(name)
        return dict(entry[1]) if entry else {}  # type: ignore[call-overload]

    async def lrange(self, name: str, start: int, end: int) -> list[str]:
        entry = self.data.get(name)
        items = list(entry[1]) if entry else []  # type: ignore[call-overload]
        return items[start:] if end == -1 else items[start : end + 1]

    async def smembers(self, name: str) -> Set[str]:
        entry = self.data.get(name)
        return set(entry[1]) if entry else set()  # type: ignore[call-overload]

    async def keys(self, pattern: str) -> list[str]:
        return [k for k in self.data if fnmatch.fnmatchcase(k, pattern)]

    async def ping(self) -> bool:
        return True


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def store(fake_redis: FakeRedis) -> CacheStore:
    return CacheStore(fake_redis)


@pytest.fixture
def cache(store: CacheStore) -> ReadThroughCache:
    return ReadThroughCache(store)


@pytest.fixture
def reader(store: CacheStore) -> CacheReader:
    return CacheReader(store)


@pytest.fixture
def db() -> MagicMock:
    """Mock AsyncSession; ``db.begin()`` works as an async context manager."""
    session = MagicMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.begin.return_value.__aexit__.return_value = False
    return session


@pytest.fixture
def sessions(db: MagicMock) -> MagicMock:
    """Mock async_sessionmaker whose sessions are all ``db``."""
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = db
    factory.return_value.__aexit__.return_value = False
    return factory


@pytest.fixture
def services() -> MagicMock:
    """Services container with every application service mocked."""
    return MagicMock()


@pytest.fixture
async def client(services: MagicMock) -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints.

    ASGITransport does not run the lifespan, so the service container is
    installed directly.
    """
    app.state.services = services
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

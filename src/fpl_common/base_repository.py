"""Shared plumbing for the read repositories.

Each query opens its own short AsyncSession so concurrent GraphQL field
resolution never shares one. Strict repositories call ``_fetch_all`` /
``_fetch_one``: a database failure is logged with its cause and re-raised
as ``DataFetchError("Failed to fetch <what>")``.
"""

import json
import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import Row, TextClause, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.fpl_cache.accessor import ReadThroughCache
from src.fpl_common.errors import DataFetchError

logger = logging.getLogger(__name__)

DB_ERRORS = (SQLAlchemyError, OSError)

_CURRENT_EVENT_SQL = text("""
    SELECT id
    FROM events
    WHERE is_current = TRUE
    ORDER BY id
    LIMIT 1
""")


def json_column(value: Any) -> Any:
    """JSON/JSONB read through text() SQL may arrive still encoded."""
    if isinstance(value, (str, bytes)):
        try:
            return json.loads(value)
        except ValueError:
            return None
    return value


class SqlRepository:
    def __init__(self, sessions: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = sessions

    async def _fetch_all(self, sql: TextClause, params: dict[str, Any], what: str) -> Sequence[Row]:
        try:
            async with self._sessions() as db:
                result = await db.execute(sql, params)
                return result.fetchall()
        except DB_ERRORS as exc:
            logger.error("Failed to fetch %s: params=%s err=%s", what, params, exc)
            raise DataFetchError(what) from exc

    async def _fetch_one(self, sql: TextClause, params: dict[str, Any], what: str) -> Row | None:
        rows = await self._fetch_all(sql, params, what)
        return rows[0] if rows else None

    async def _current_event_id(self) -> int | None:
        row = await self._fetch_one(_CURRENT_EVENT_SQL, {}, "current event")
        return row.id if row else None


class CachedRepository(SqlRepository):
    """SqlRepository whose reads go through the JSON read-through cache."""

    def __init__(
        self,
        sessions: async_sessionmaker[AsyncSession],
        cache: ReadThroughCache,
        ttl_seconds: int,
    ) -> None:
        super().__init__(sessions)
        self._cache = cache
        self._ttl = ttl_seconds

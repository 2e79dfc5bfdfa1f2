"""FixtureRepository — event_fixtures reads, ordered by kickoff time."""

from pydantic import TypeAdapter
from sqlalchemy import text

from src.fpl_cache.keys import clamp_limit, clamp_offset, identity_key, list_key, normalize_filter, scoped_key
from src.fpl_common.base_repository import CachedRepository
from src.fpl_common.datetime_utils import to_iso
from src.fpl_fixtures.domain.models import Fixture, FixturesFilter

_CURRENT_KEY = "fixtures:current"

_FIXTURE_ADAPTER = TypeAdapter(Fixture)
_FIXTURE_LIST_ADAPTER = TypeAdapter(list[Fixture])

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_FIXTURE_COLUMNS = """
    id, code, event_id, finished, finished_provisional, kickoff_time,
    minutes, started, team_h_id, team_a_id, team_h_score, team_a_score,
    team_h_difficulty, team_a_difficulty
"""

_GET_FIXTURE_SQL = text(f"""
    SELECT {_FIXTURE_COLUMNS}
    FROM event_fixtures
    WHERE id = :fixture_id
    LIMIT 1
""")

_LIST_FIXTURES_SQL = text(f"""
    SELECT {_FIXTURE_COLUMNS}
    FROM event_fixtures
    WHERE
        (CAST(:event_id AS INTEGER) IS NULL OR event_id = CAST(:event_id AS INTEGER))
        AND (CAST(:finished AS BOOLEAN) IS NULL OR finished = CAST(:finished AS BOOLEAN))
        AND (
            CAST(:team_id AS INTEGER) IS NULL
            OR team_h_id = CAST(:team_id AS INTEGER)
            OR team_a_id = CAST(:team_id AS INTEGER)
        )
    ORDER BY kickoff_time ASC NULLS LAST, id ASC
    LIMIT :limit OFFSET :offset
""")

_EVENT_FIXTURES_SQL = text(f"""
    SELECT {_FIXTURE_COLUMNS}
    FROM event_fixtures
    WHERE event_id = :event_id
    ORDER BY kickoff_time ASC NULLS LAST, id ASC
""")

# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def row_to_fixture(row: object) -> Fixture:
    return Fixture(
        id=row.id,  # type: ignore[attr-defined]
        code=row.code,  # type: ignore[attr-defined]
        event_id=row.event_id,  # type: ignore[attr-defined]
        finished=bool(row.finished),  # type: ignore[attr-defined]
        finished_provisional=bool(row.finished_provisional),  # type: ignore[attr-defined]
        kickoff_time=to_iso(row.kickoff_time),  # type: ignore[attr-defined]
        minutes=row.minutes or 0,  # type: ignore[attr-defined]
        started=row.started,  # type: ignore[attr-defined]
        team_h_id=row.team_h_id,  # type: ignore[attr-defined]
        team_a_id=row.team_a_id,  # type: ignore[attr-defined]
        team_h_score=row.team_h_score,  # type: ignore[attr-defined]
        team_a_score=row.team_a_score,  # type: ignore[attr-defined]
        team_h_difficulty=row.team_h_difficulty,  # type: ignore[attr-defined]
        team_a_difficulty=row.team_a_difficulty,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class FixtureRepository(CachedRepository):
    async def get_fixture_by_id(self, fixture_id: int) -> Fixture | None:
        async def load() -> Fixture | None:
            row = await self._fetch_one(_GET_FIXTURE_SQL, {"fixture_id": fixture_id}, "fixture")
            return row_to_fixture(row) if row else None

        return await self._cache.get_or_populate(
            identity_key("fixtures", fixture_id), load, self._ttl, _FIXTURE_ADAPTER
        )

    async def list_fixtures(
        self,
        filter_: FixturesFilter | None,
        limit: int,
        offset: int,
    ) -> list[Fixture]:
        safe_limit = clamp_limit(limit)
        safe_offset = clamp_offset(offset)
        flt = filter_ or FixturesFilter()

        async def load() -> list[Fixture]:
            rows = await self._fetch_all(
                _LIST_FIXTURES_SQL,
                {
                    "event_id": flt.event_id,
                    "team_id": flt.team_id,
                    "finished": flt.finished,
                    "limit": safe_limit,
                    "offset": safe_offset,
                },
                "fixtures",
            )
            return [row_to_fixture(row) for row in rows]

        key = list_key("fixtures", normalize_filter(filter_), safe_limit, safe_offset)
        fixtures = await self._cache.get_or_populate(key, load, self._ttl, _FIXTURE_LIST_ADAPTER)
        return fixtures or []

    async def get_current_fixtures(self) -> list[Fixture]:
        async def load() -> list[Fixture] | None:
            current_id = await self._current_event_id()
            if current_id is None:
                # Between seasons: nothing to cache.
                return None
            return await self._load_event_fixtures(current_id, "current fixtures")

        fixtures = await self._cache.get_or_populate(
            _CURRENT_KEY, load, self._ttl, _FIXTURE_LIST_ADAPTER
        )
        return fixtures or []

    async def get_event_fixtures(self, event_id: int) -> list[Fixture]:
        async def load() -> list[Fixture]:
            return await self._load_event_fixtures(event_id, "event fixtures")

        fixtures = await self._cache.get_or_populate(
            scoped_key("fixtures", "event", event_id), load, self._ttl, _FIXTURE_LIST_ADAPTER
        )
        return fixtures or []

    async def _load_event_fixtures(self, event_id: int, what: str) -> list[Fixture]:
        rows = await self._fetch_all(_EVENT_FIXTURES_SQL, {"event_id": event_id}, what)
        return [row_to_fixture(row) for row in rows]

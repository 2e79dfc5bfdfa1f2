"""LeagueRepository — entry_league_infos and league_event_results reads."""

from pydantic import TypeAdapter
from sqlalchemy import text

from src.fpl_cache.keys import clamp_limit, scoped_key, stable_stringify
from src.fpl_common.base_repository import CachedRepository
from src.fpl_leagues.domain.models import (
    League,
    LeagueEventResult,
    LeagueStanding,
    league_type_from_db,
)

_LEAGUE_LIST_ADAPTER = TypeAdapter(list[League])
_STANDING_LIST_ADAPTER = TypeAdapter(list[LeagueStanding])
_RESULT_LIST_ADAPTER = TypeAdapter(list[LeagueEventResult])

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_ENTRY_LEAGUE_COLUMNS = """
    league_id, league_name, league_type, entry_id,
    entry_rank, entry_last_rank, started_event
"""

_ENTRY_LEAGUES_SQL = text(f"""
    SELECT {_ENTRY_LEAGUE_COLUMNS}
    FROM entry_league_infos
    WHERE entry_id = :entry_id
    ORDER BY league_id ASC
""")

_STANDINGS_SQL = text(f"""
    SELECT {_ENTRY_LEAGUE_COLUMNS}
    FROM entry_league_infos
    WHERE league_id = :league_id
    ORDER BY entry_rank ASC NULLS LAST
    LIMIT :limit
""")

_EVENT_RESULTS_SQL = text("""
    SELECT league_id, league_type, event_id, entry_id, entry_name, player_name,
           event_points, event_rank, overall_points, overall_rank
    FROM league_event_results
    WHERE league_id = :league_id AND event_id = :event_id
    ORDER BY event_rank ASC NULLS LAST
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def row_to_league(row: object) -> League:
    return League(
        id=row.league_id,  # type: ignore[attr-defined]
        name=row.league_name,  # type: ignore[attr-defined]
        type=league_type_from_db(row.league_type),  # type: ignore[attr-defined]
        started_event=row.started_event,  # type: ignore[attr-defined]
    )


def row_to_standing(row: object) -> LeagueStanding:
    return LeagueStanding(
        league_id=row.league_id,  # type: ignore[attr-defined]
        league_name=row.league_name,  # type: ignore[attr-defined]
        league_type=league_type_from_db(row.league_type),  # type: ignore[attr-defined]
        entry_id=row.entry_id,  # type: ignore[attr-defined]
        rank=row.entry_rank,  # type: ignore[attr-defined]
        last_rank=row.entry_last_rank,  # type: ignore[attr-defined]
        started_event=row.started_event,  # type: ignore[attr-defined]
    )


def row_to_event_result(row: object) -> LeagueEventResult:
    return LeagueEventResult(
        league_id=row.league_id,  # type: ignore[attr-defined]
        league_type=league_type_from_db(row.league_type),  # type: ignore[attr-defined]
        event_id=row.event_id,  # type: ignore[attr-defined]
        entry_id=row.entry_id,  # type: ignore[attr-defined]
        entry_name=row.entry_name,  # type: ignore[attr-defined]
        player_name=row.player_name,  # type: ignore[attr-defined]
        event_points=row.event_points or 0,  # type: ignore[attr-defined]
        event_rank=row.event_rank,  # type: ignore[attr-defined]
        overall_points=row.overall_points or 0,  # type: ignore[attr-defined]
        overall_rank=row.overall_rank or 0,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class LeagueRepository(CachedRepository):
    async def get_entry_leagues(self, entry_id: int) -> list[League]:
        async def load() -> list[League]:
            rows = await self._fetch_all(_ENTRY_LEAGUES_SQL, {"entry_id": entry_id}, "entry leagues")
            return [row_to_league(row) for row in rows]

        leagues = await self._cache.get_or_populate(
            scoped_key("leagues", "entry", entry_id), load, self._ttl, _LEAGUE_LIST_ADAPTER
        )
        return leagues or []

    async def get_league_standings(self, league_id: int, limit: int) -> list[LeagueStanding]:
        safe_limit = clamp_limit(limit)

        async def load() -> list[LeagueStanding]:
            rows = await self._fetch_all(
                _STANDINGS_SQL,
                {"league_id": league_id, "limit": safe_limit},
                "league standings",
            )
            return [row_to_standing(row) for row in rows]

        key = scoped_key(
            "leagues", "standings", stable_stringify({"leagueId": league_id, "limit": safe_limit})
        )
        standings = await self._cache.get_or_populate(key, load, self._ttl, _STANDING_LIST_ADAPTER)
        return standings or []

    async def get_league_event_results(self, league_id: int, event_id: int) -> list[LeagueEventResult]:
        async def load() -> list[LeagueEventResult]:
            rows = await self._fetch_all(
                _EVENT_RESULTS_SQL,
                {"league_id": league_id, "event_id": event_id},
                "league event results",
            )
            return [row_to_event_result(row) for row in rows]

        key = scoped_key(
            "leagues", "results", stable_stringify({"eventId": event_id, "leagueId": league_id})
        )
        results = await self._cache.get_or_populate(key, load, self._ttl, _RESULT_LIST_ADAPTER)
        return results or []

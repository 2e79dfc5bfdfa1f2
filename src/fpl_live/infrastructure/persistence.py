"""LiveRepository — event_lives reads on the short live TTL.

When no event id is given the current event is resolved first; with no
current event (between seasons) the answer is empty and nothing is cached.
"""

from pydantic import TypeAdapter
from sqlalchemy import text

from src.fpl_cache.keys import normalize_filter, scoped_key, stable_stringify
from src.fpl_common.base_repository import CachedRepository
from src.fpl_live.domain.models import EventLive, LivePerformance, LiveScoresFilter

_PERFORMANCE_ADAPTER = TypeAdapter(LivePerformance)
_PERFORMANCE_LIST_ADAPTER = TypeAdapter(list[LivePerformance])
_EVENT_LIVE_ADAPTER = TypeAdapter(EventLive)

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_LIVE_COLUMNS = """
    event_id, element_id, minutes, goals_scored, assists, clean_sheets,
    goals_conceded, own_goals, penalties_saved, penalties_missed,
    yellow_cards, red_cards, saves, bonus, bps, starts,
    expected_goals, expected_assists, expected_goal_involvements,
    expected_goals_conceded, in_dream_team, total_points
"""

_LIVE_SCORES_SQL = text(f"""
    SELECT {_LIVE_COLUMNS}
    FROM event_lives
    WHERE
        event_id = :event_id
        AND (CAST(:in_dream_team AS BOOLEAN) IS NULL OR in_dream_team = CAST(:in_dream_team AS BOOLEAN))
        AND (CAST(:min_points AS INTEGER) IS NULL OR total_points >= CAST(:min_points AS INTEGER))
        AND (CAST(:max_points AS INTEGER) IS NULL OR total_points <= CAST(:max_points AS INTEGER))
    ORDER BY element_id ASC
""")

_PLAYER_LIVE_SQL = text(f"""
    SELECT {_LIVE_COLUMNS}
    FROM event_lives
    WHERE event_id = :event_id AND element_id = :player_id
    LIMIT 1
""")

# ---------------------------------------------------------------------------
# Row mapper / keys
# ---------------------------------------------------------------------------


def row_to_performance(row: object) -> LivePerformance:
    return LivePerformance(
        event_id=row.event_id,  # type: ignore[attr-defined]
        player_id=row.element_id,  # type: ignore[attr-defined]
        minutes=row.minutes,  # type: ignore[attr-defined]
        goals_scored=row.goals_scored,  # type: ignore[attr-defined]
        assists=row.assists,  # type: ignore[attr-defined]
        clean_sheets=row.clean_sheets,  # type: ignore[attr-defined]
        goals_conceded=row.goals_conceded,  # type: ignore[attr-defined]
        own_goals=row.own_goals,  # type: ignore[attr-defined]
        penalties_saved=row.penalties_saved,  # type: ignore[attr-defined]
        penalties_missed=row.penalties_missed,  # type: ignore[attr-defined]
        yellow_cards=row.yellow_cards,  # type: ignore[attr-defined]
        red_cards=row.red_cards,  # type: ignore[attr-defined]
        saves=row.saves,  # type: ignore[attr-defined]
        bonus=row.bonus,  # type: ignore[attr-defined]
        bps=row.bps,  # type: ignore[attr-defined]
        starts=row.starts,  # type: ignore[attr-defined]
        expected_goals=_decimal_text(row.expected_goals),  # type: ignore[attr-defined]
        expected_assists=_decimal_text(row.expected_assists),  # type: ignore[attr-defined]
        expected_goal_involvements=_decimal_text(row.expected_goal_involvements),  # type: ignore[attr-defined]
        expected_goals_conceded=_decimal_text(row.expected_goals_conceded),  # type: ignore[attr-defined]
        in_dream_team=row.in_dream_team,  # type: ignore[attr-defined]
        total_points=row.total_points or 0,  # type: ignore[attr-defined]
    )


def _decimal_text(value: object) -> str | None:
    return None if value is None else str(value)


def live_scores_key(event_id: int, filter_: LiveScoresFilter | None) -> str:
    """``live:scores:{event}``, plus the normalized filter when any field is set."""
    normalized = normalize_filter(filter_)
    if normalized is None:
        return scoped_key("live", "scores", event_id)
    return scoped_key("live", "scores", event_id, stable_stringify(normalized))


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class LiveRepository(CachedRepository):
    async def get_live_scores(
        self,
        event_id: int | None,
        filter_: LiveScoresFilter | None,
    ) -> list[LivePerformance]:
        target = event_id if event_id is not None else await self._current_event_id()
        if target is None:
            return []
        flt = filter_ or LiveScoresFilter()

        async def load() -> list[LivePerformance]:
            rows = await self._fetch_all(
                _LIVE_SCORES_SQL,
                {
                    "event_id": target,
                    "in_dream_team": flt.in_dream_team,
                    "min_points": flt.min_total_points,
                    "max_points": flt.max_total_points,
                },
                "live scores",
            )
            return [row_to_performance(row) for row in rows]

        performances = await self._cache.get_or_populate(
            live_scores_key(target, filter_), load, self._ttl, _PERFORMANCE_LIST_ADAPTER
        )
        return performances or []

    async def get_player_live(self, player_id: int, event_id: int | None) -> LivePerformance | None:
        target = event_id if event_id is not None else await self._current_event_id()
        if target is None:
            return None

        async def load() -> LivePerformance | None:
            row = await self._fetch_one(
                _PLAYER_LIVE_SQL,
                {"event_id": target, "player_id": player_id},
                "player live performance",
            )
            return row_to_performance(row) if row else None

        return await self._cache.get_or_populate(
            scoped_key("live", "player", player_id, target), load, self._ttl, _PERFORMANCE_ADAPTER
        )

    async def get_event_live(self, event_id: int) -> EventLive:
        async def load() -> EventLive:
            rows = await self._fetch_all(
                _LIVE_SCORES_SQL,
                {"event_id": event_id, "in_dream_team": None, "min_points": None, "max_points": None},
                "event live data",
            )
            return EventLive(event_id=event_id, performances=[row_to_performance(r) for r in rows])

        event_live = await self._cache.get_or_populate(
            scoped_key("live", "event", event_id), load, self._ttl, _EVENT_LIVE_ADAPTER
        )
        return event_live or EventLive(event_id=event_id)

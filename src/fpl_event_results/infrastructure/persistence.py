"""EventResultRepository — ``EventOverallResult:{season}``, best-effort.

The cache entry is decoded in whatever shape the producer wrote it and
sorted by event number. Only the season currently loaded in ``events``
can be rebuilt from the database; other seasons come from the cache or
not at all.
"""

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.fpl_cache.fallback import CacheReader, read_with_fallback
from src.fpl_common.base_repository import SqlRepository, json_column
from src.fpl_event_results.domain.models import (
    EventResult,
    event_result_from_cache,
    parse_chip_plays,
    parse_top_element_info,
)

logger = logging.getLogger(__name__)

KEY_PREFIX = "EventOverallResult"

_FINISHED_EVENTS_SQL = text("""
    SELECT id, average_entry_score, finished, highest_scoring_entry, highest_score,
           chip_plays, most_selected, most_transferred_in, top_element_info,
           transfers_made, most_captained, most_vice_captained
    FROM events
    WHERE finished = TRUE
    ORDER BY id ASC
""")


def row_to_event_result(row: object) -> EventResult:
    return EventResult(
        event=row.id,  # type: ignore[attr-defined]
        average_entry_score=row.average_entry_score or 0,  # type: ignore[attr-defined]
        finished=bool(row.finished),  # type: ignore[attr-defined]
        highest_scoring_entry=row.highest_scoring_entry or 0,  # type: ignore[attr-defined]
        highest_score=row.highest_score or 0,  # type: ignore[attr-defined]
        chip_plays=parse_chip_plays(json_column(row.chip_plays)),  # type: ignore[attr-defined]
        most_selected=row.most_selected or 0,  # type: ignore[attr-defined]
        most_transferred_in=row.most_transferred_in or 0,  # type: ignore[attr-defined]
        top_element_info=parse_top_element_info(json_column(row.top_element_info)),  # type: ignore[attr-defined]
        transfers_made=row.transfers_made or 0,  # type: ignore[attr-defined]
        most_captained=row.most_captained or 0,  # type: ignore[attr-defined]
        most_vice_captained=row.most_vice_captained or 0,  # type: ignore[attr-defined]
    )


def _by_event(result: EventResult) -> int:
    return result.event


class EventResultRepository(SqlRepository):
    def __init__(
        self,
        sessions: async_sessionmaker[AsyncSession],
        reader: CacheReader,
        current_season: int | None = None,
    ) -> None:
        super().__init__(sessions)
        self._reader = reader
        self._current_season = current_season

    async def get_event_overall_result(self, season: int) -> list[EventResult]:
        async def load() -> list[EventResult]:
            if self._current_season is not None and season != self._current_season:
                logger.warning(
                    "No database source for past season: season=%s current=%s",
                    season,
                    self._current_season,
                )
                return []
            rows = await self._fetch_all(_FINISHED_EVENTS_SQL, {}, "event overall result")
            return [row_to_event_result(row) for row in rows]

        return await read_with_fallback(
            self._reader,
            f"{KEY_PREFIX}:{season}",
            event_result_from_cache,
            load,
            label="event overall result",
            sort_key=_by_event,
        )

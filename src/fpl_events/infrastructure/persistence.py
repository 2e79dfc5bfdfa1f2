"""EventRepository — concrete implementation of EventRepositoryProtocol.

Read-through cached, strict: a database failure raises DataFetchError.
asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.
"""

import logging

from pydantic import TypeAdapter
from sqlalchemy import text

from src.fpl_cache.keys import clamp_limit, clamp_offset, identity_key, list_key, normalize_filter
from src.fpl_common.base_repository import DB_ERRORS, CachedRepository, json_column
from src.fpl_common.datetime_utils import to_iso
from src.fpl_events.domain.models import CurrentEventInfo, Event, EventsFilter

logger = logging.getLogger(__name__)

_DOMAIN = "events"
_CURRENT_INFO_KEY = "events:currentEventInfo"

_EVENT_ADAPTER = TypeAdapter(Event)
_EVENT_LIST_ADAPTER = TypeAdapter(list[Event])
_CURRENT_INFO_ADAPTER = TypeAdapter(CurrentEventInfo)

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_EVENT_COLUMNS = """
    id, name, deadline_time, average_entry_score, finished, data_checked,
    highest_scoring_entry, deadline_time_epoch, deadline_time_game_offset,
    highest_score, is_previous, is_current, is_next,
    cup_league_create, h2h_ko_matches_created, chip_plays,
    most_selected, most_transferred_in, top_element, top_element_info,
    transfers_made, most_captained, most_vice_captained
"""

_GET_EVENT_SQL = text(f"""
    SELECT {_EVENT_COLUMNS}
    FROM events
    WHERE id = :event_id
    LIMIT 1
""")

_LIST_EVENTS_SQL = text(f"""
    SELECT {_EVENT_COLUMNS}
    FROM events
    WHERE
        (CAST(:is_previous AS BOOLEAN) IS NULL OR is_previous = CAST(:is_previous AS BOOLEAN))
        AND (CAST(:is_current AS BOOLEAN) IS NULL OR is_current = CAST(:is_current AS BOOLEAN))
        AND (CAST(:is_next AS BOOLEAN) IS NULL OR is_next = CAST(:is_next AS BOOLEAN))
        AND (CAST(:finished AS BOOLEAN) IS NULL OR finished = CAST(:finished AS BOOLEAN))
        AND (CAST(:data_checked AS BOOLEAN) IS NULL OR data_checked = CAST(:data_checked AS BOOLEAN))
    ORDER BY id ASC
    LIMIT :limit OFFSET :offset
""")

_NEXT_DEADLINE_SQL = text("""
    SELECT deadline_time
    FROM events
    WHERE is_next = TRUE
    ORDER BY id
    LIMIT 1
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def row_to_event(row: object) -> Event:
    return Event(
        id=row.id,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        deadline_time=to_iso(row.deadline_time),  # type: ignore[attr-defined]
        average_entry_score=row.average_entry_score,  # type: ignore[attr-defined]
        finished=bool(row.finished),  # type: ignore[attr-defined]
        data_checked=bool(row.data_checked),  # type: ignore[attr-defined]
        highest_scoring_entry=row.highest_scoring_entry,  # type: ignore[attr-defined]
        deadline_time_epoch=row.deadline_time_epoch,  # type: ignore[attr-defined]
        deadline_time_game_offset=row.deadline_time_game_offset,  # type: ignore[attr-defined]
        highest_score=row.highest_score,  # type: ignore[attr-defined]
        is_previous=bool(row.is_previous),  # type: ignore[attr-defined]
        is_current=bool(row.is_current),  # type: ignore[attr-defined]
        is_next=bool(row.is_next),  # type: ignore[attr-defined]
        cup_league_create=bool(row.cup_league_create),  # type: ignore[attr-defined]
        h2h_ko_matches_created=bool(row.h2h_ko_matches_created),  # type: ignore[attr-defined]
        chip_plays=json_column(row.chip_plays),  # type: ignore[attr-defined]
        most_selected=row.most_selected,  # type: ignore[attr-defined]
        most_transferred_in=row.most_transferred_in,  # type: ignore[attr-defined]
        top_element=row.top_element,  # type: ignore[attr-defined]
        top_element_info=json_column(row.top_element_info),  # type: ignore[attr-defined]
        transfers_made=row.transfers_made,  # type: ignore[attr-defined]
        most_captained=row.most_captained,  # type: ignore[attr-defined]
        most_vice_captained=row.most_vice_captained,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class EventRepository(CachedRepository):
    async def get_event_by_id(self, event_id: int) -> Event | None:
        async def load() -> Event | None:
            row = await self._fetch_one(_GET_EVENT_SQL, {"event_id": event_id}, "event")
            return row_to_event(row) if row else None

        return await self._cache.get_or_populate(
            identity_key(_DOMAIN, event_id), load, self._ttl, _EVENT_ADAPTER
        )

    async def list_events(
        self,
        filter_: EventsFilter | None,
        limit: int,
        offset: int,
    ) -> list[Event]:
        safe_limit = clamp_limit(limit)
        safe_offset = clamp_offset(offset)
        flt = filter_ or EventsFilter()

        async def load() -> list[Event]:
            rows = await self._fetch_all(
                _LIST_EVENTS_SQL,
                {
                    "is_previous": flt.is_previous,
                    "is_current": flt.is_current,
                    "is_next": flt.is_next,
                    "finished": flt.finished,
                    "data_checked": flt.data_checked,
                    "limit": safe_limit,
                    "offset": safe_offset,
                },
                "events",
            )
            return [row_to_event(row) for row in rows]

        key = list_key(_DOMAIN, normalize_filter(filter_), safe_limit, safe_offset)
        events = await self._cache.get_or_populate(key, load, self._ttl, _EVENT_LIST_ADAPTER)
        return events or []

    async def get_current_event_info(self) -> CurrentEventInfo | None:
        async def load() -> CurrentEventInfo | None:
            current_id = await self._current_event_id()
            if current_id is None:
                return None

            # A missing next deadline (end of season, or a failed read) is not fatal.
            next_deadline: str | None = None
            try:
                async with self._sessions() as db:
                    result = await db.execute(_NEXT_DEADLINE_SQL)
                    row = result.fetchone()
                next_deadline = to_iso(row.deadline_time) if row else None
            except DB_ERRORS as exc:
                logger.error("Failed to fetch next event deadline: err=%s", exc)

            return CurrentEventInfo(current_event=current_id, next_utc_deadline=next_deadline)

        return await self._cache.get_or_populate(
            _CURRENT_INFO_KEY, load, self._ttl, _CURRENT_INFO_ADAPTER
        )

"""EntryRepository — entry_infos and entry_event_results reads."""

from pydantic import TypeAdapter
from sqlalchemy import text

from src.fpl_cache.keys import identity_key, scoped_key
from src.fpl_common.base_repository import CachedRepository
from src.fpl_entries.domain.models import Entry, EntryEventResult

_ENTRY_ADAPTER = TypeAdapter(Entry)
_RESULT_ADAPTER = TypeAdapter(EntryEventResult)
_RESULT_LIST_ADAPTER = TypeAdapter(list[EntryEventResult])

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_RESULT_COLUMNS = """
    entry_id, event_id, event_points, event_rank, overall_points, overall_rank,
    event_transfers, event_transfers_cost, event_net_points, team_value, bank
"""

_GET_ENTRY_SQL = text("""
    SELECT id, entry_name, player_name, region, started_event, overall_points,
           overall_rank, bank, team_value, total_transfers
    FROM entry_infos
    WHERE id = :entry_id
    LIMIT 1
""")

_HISTORY_SQL = text(f"""
    SELECT {_RESULT_COLUMNS}
    FROM entry_event_results
    WHERE entry_id = :entry_id
    ORDER BY event_id ASC
""")

_EVENT_RESULT_SQL = text(f"""
    SELECT {_RESULT_COLUMNS}
    FROM entry_event_results
    WHERE entry_id = :entry_id AND event_id = :event_id
    LIMIT 1
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def row_to_entry(row: object) -> Entry:
    return Entry(
        id=row.id,  # type: ignore[attr-defined]
        entry_name=row.entry_name,  # type: ignore[attr-defined]
        player_name=row.player_name,  # type: ignore[attr-defined]
        region=row.region,  # type: ignore[attr-defined]
        started_event=row.started_event,  # type: ignore[attr-defined]
        overall_points=row.overall_points,  # type: ignore[attr-defined]
        overall_rank=row.overall_rank,  # type: ignore[attr-defined]
        bank=row.bank,  # type: ignore[attr-defined]
        team_value=row.team_value,  # type: ignore[attr-defined]
        total_transfers=row.total_transfers,  # type: ignore[attr-defined]
    )


def row_to_event_result(row: object) -> EntryEventResult:
    return EntryEventResult(
        entry_id=row.entry_id,  # type: ignore[attr-defined]
        event_id=row.event_id,  # type: ignore[attr-defined]
        event_points=row.event_points or 0,  # type: ignore[attr-defined]
        event_rank=row.event_rank,  # type: ignore[attr-defined]
        overall_points=row.overall_points or 0,  # type: ignore[attr-defined]
        overall_rank=row.overall_rank or 0,  # type: ignore[attr-defined]
        event_transfers=row.event_transfers or 0,  # type: ignore[attr-defined]
        event_transfers_cost=row.event_transfers_cost or 0,  # type: ignore[attr-defined]
        event_net_points=row.event_net_points or 0,  # type: ignore[attr-defined]
        team_value=row.team_value,  # type: ignore[attr-defined]
        bank=row.bank,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class EntryRepository(CachedRepository):
    async def get_entry_by_id(self, entry_id: int) -> Entry | None:
        async def load() -> Entry | None:
            row = await self._fetch_one(_GET_ENTRY_SQL, {"entry_id": entry_id}, "entry")
            return row_to_entry(row) if row else None

        return await self._cache.get_or_populate(
            identity_key("entries", entry_id), load, self._ttl, _ENTRY_ADAPTER
        )

    async def get_entry_history(self, entry_id: int) -> list[EntryEventResult]:
        async def load() -> list[EntryEventResult]:
            rows = await self._fetch_all(_HISTORY_SQL, {"entry_id": entry_id}, "entry history")
            return [row_to_event_result(row) for row in rows]

        history = await self._cache.get_or_populate(
            scoped_key("entries", "history", entry_id), load, self._ttl, _RESULT_LIST_ADAPTER
        )
        return history or []

    async def get_entry_event_result(self, entry_id: int, event_id: int) -> EntryEventResult | None:
        async def load() -> EntryEventResult | None:
            row = await self._fetch_one(
                _EVENT_RESULT_SQL,
                {"entry_id": entry_id, "event_id": event_id},
                "entry event result",
            )
            return row_to_event_result(row) if row else None

        return await self._cache.get_or_populate(
            scoped_key("entries", "result", entry_id, event_id), load, self._ttl, _RESULT_ADAPTER
        )

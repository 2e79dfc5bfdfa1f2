"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from src.fpl_entries.domain.models import Entry, EntryEventResult


class EntryRepositoryProtocol(Protocol):
    async def get_entry_by_id(self, entry_id: int) -> Entry | None: ...

    async def get_entry_history(self, entry_id: int) -> list[EntryEventResult]: ...

    async def get_entry_event_result(self, entry_id: int, event_id: int) -> EntryEventResult | None: ...

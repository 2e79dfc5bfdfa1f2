"""EntryApplicationService — pass-through over EntryRepository."""

from src.fpl_entries.domain.models import Entry, EntryEventResult
from src.fpl_entries.domain.repository import EntryRepositoryProtocol


class EntryApplicationService:
    def __init__(self, repo: EntryRepositoryProtocol) -> None:
        self._repo = repo

    async def get_entry(self, entry_id: int) -> Entry | None:
        return await self._repo.get_entry_by_id(entry_id)

    async def get_entry_history(self, entry_id: int) -> list[EntryEventResult]:
        return await self._repo.get_entry_history(entry_id)

    async def get_entry_event_result(self, entry_id: int, event_id: int) -> EntryEventResult | None:
        return await self._repo.get_entry_event_result(entry_id, event_id)

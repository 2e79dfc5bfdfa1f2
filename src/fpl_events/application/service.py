"""EventApplicationService — thin composition layer over EventRepository.

Read-only; each repository call owns its session.
"""

from src.fpl_events.domain.models import CurrentEventInfo, Event, EventsFilter
from src.fpl_events.domain.repository import EventRepositoryProtocol


class EventApplicationService:
    def __init__(self, repo: EventRepositoryProtocol) -> None:
        self._repo = repo

    async def get_event(self, event_id: int) -> Event | None:
        return await self._repo.get_event_by_id(event_id)

    async def list_events(
        self,
        filter_: EventsFilter | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Event]:
        return await self._repo.list_events(filter_, limit, offset)

    async def get_current_event_info(self) -> CurrentEventInfo | None:
        return await self._repo.get_current_event_info()

"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from src.fpl_events.domain.models import CurrentEventInfo, Event, EventsFilter


class EventRepositoryProtocol(Protocol):
    async def get_event_by_id(self, event_id: int) -> Event | None: ...

    async def list_events(
        self,
        filter_: EventsFilter | None,
        limit: int,
        offset: int,
    ) -> list[Event]: ...

    async def get_current_event_info(self) -> CurrentEventInfo | None: ...

"""GraphQL surface for fpl_events.

Query fields:
  event(id)                       — single event or null
  events(filter, limit, offset)   — paginated list ordered by id
  currentEventInfo                — current event id + next deadline
"""

import strawberry
from strawberry.scalars import JSON

from src.fpl_events.domain.models import CurrentEventInfo, Event, EventsFilter
from src.fpl_gateway.graphql.context import get_services


@strawberry.type(name="Event")
class EventType:
    id: int
    name: str
    deadline_time: str | None
    average_entry_score: int | None
    finished: bool
    data_checked: bool
    highest_scoring_entry: int | None
    deadline_time_epoch: int | None
    deadline_time_game_offset: int | None
    highest_score: int | None
    is_previous: bool
    is_current: bool
    is_next: bool
    cup_league_create: bool
    h2h_ko_matches_created: bool
    chip_plays: JSON | None
    most_selected: int | None
    most_transferred_in: int | None
    top_element: int | None
    top_element_info: JSON | None
    transfers_made: int | None
    most_captained: int | None
    most_vice_captained: int | None

    @classmethod
    def from_domain(cls, event: Event) -> "EventType":
        return cls(**event.model_dump())


@strawberry.type(name="CurrentEventInfo")
class CurrentEventInfoType:
    current_event: int
    next_utc_deadline: str | None

    @classmethod
    def from_domain(cls, info: CurrentEventInfo) -> "CurrentEventInfoType":
        return cls(current_event=info.current_event, next_utc_deadline=info.next_utc_deadline)


@strawberry.input(name="EventsFilter")
class EventsFilterInput:
    is_previous: bool | None = None
    is_current: bool | None = None
    is_next: bool | None = None
    finished: bool | None = None
    data_checked: bool | None = None

    def to_domain(self) -> EventsFilter:
        return EventsFilter(
            is_previous=self.is_previous,
            is_current=self.is_current,
            is_next=self.is_next,
            finished=self.finished,
            data_checked=self.data_checked,
        )


@strawberry.type
class EventQuery:
    @strawberry.field
    async def event(self, info: strawberry.Info, id: int) -> EventType | None:
        event = await get_services(info).events.get_event(id)
        return EventType.from_domain(event) if event else None

    @strawberry.field
    async def events(
        self,
        info: strawberry.Info,
        filter: EventsFilterInput | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[EventType]:
        domain_filter = filter.to_domain() if filter else None
        events = await get_services(info).events.list_events(domain_filter, limit, offset)
        return [EventType.from_domain(e) for e in events]

    @strawberry.field
    async def current_event_info(self, info: strawberry.Info) -> CurrentEventInfoType | None:
        current = await get_services(info).events.get_current_event_info()
        return CurrentEventInfoType.from_domain(current) if current else None

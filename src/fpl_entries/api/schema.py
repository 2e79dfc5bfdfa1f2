"""GraphQL surface for fpl_entries."""

import strawberry

from src.fpl_entries.domain.models import Entry, EntryEventResult
from src.fpl_events.api.schema import EventType
from src.fpl_gateway.graphql.context import get_services


@strawberry.type(name="Entry")
class EntryType:
    id: int
    entry_name: str
    player_name: str
    region: str | None
    started_event: int | None
    overall_points: int | None
    overall_rank: int | None
    bank: int | None
    team_value: int | None
    total_transfers: int | None

    @classmethod
    def from_domain(cls, entry: Entry) -> "EntryType":
        return cls(**entry.model_dump())


@strawberry.type(name="EntryEventResult")
class EntryEventResultType:
    event_points: int
    event_rank: int | None
    overall_points: int
    overall_rank: int
    event_transfers: int
    event_transfers_cost: int
    event_net_points: int
    team_value: int | None
    bank: int | None
    entry_id: strawberry.Private[int]
    event_id: strawberry.Private[int]

    @strawberry.field
    async def entry(self, info: strawberry.Info) -> EntryType | None:
        entry = await get_services(info).entries.get_entry(self.entry_id)
        return EntryType.from_domain(entry) if entry else None

    @strawberry.field
    async def event(self, info: strawberry.Info) -> EventType | None:
        event = await get_services(info).events.get_event(self.event_id)
        return EventType.from_domain(event) if event else None

    @classmethod
    def from_domain(cls, result: EntryEventResult) -> "EntryEventResultType":
        return cls(**result.model_dump())


@strawberry.type
class EntryQuery:
    @strawberry.field
    async def entry(self, info: strawberry.Info, id: int) -> EntryType | None:
        entry = await get_services(info).entries.get_entry(id)
        return EntryType.from_domain(entry) if entry else None

    @strawberry.field
    async def entry_history(self, info: strawberry.Info, entry_id: int) -> list[EntryEventResultType]:
        history = await get_services(info).entries.get_entry_history(entry_id)
        return [EntryEventResultType.from_domain(r) for r in history]

    @strawberry.field
    async def entry_event_result(
        self, info: strawberry.Info, entry_id: int, event_id: int
    ) -> EntryEventResultType | None:
        result = await get_services(info).entries.get_entry_event_result(entry_id, event_id)
        return EntryEventResultType.from_domain(result) if result else None

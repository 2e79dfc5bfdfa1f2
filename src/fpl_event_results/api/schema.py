"""GraphQL surface for fpl_event_results.

The ``*Player`` fields resolve a player id through the players service; an
id of 0 means "not reported" and resolves to null.
"""

import strawberry

from src.fpl_event_results.domain.models import ChipPlay, EventResult, TopElementInfo
from src.fpl_gateway.graphql.context import get_services
from src.fpl_players.api.schema import PlayerType


async def _player_or_none(info: strawberry.Info, player_id: int) -> PlayerType | None:
    if not player_id:
        return None
    player = await get_services(info).players.get_player(player_id)
    return PlayerType.from_domain(player) if player else None


@strawberry.type(name="ChipPlay")
class ChipPlayType:
    chip_name: str
    number_played: int

    @classmethod
    def from_domain(cls, chip: ChipPlay) -> "ChipPlayType":
        return cls(chip_name=chip.chip_name, number_played=chip.number_played)


@strawberry.type(name="TopElementInfo")
class TopElementInfoType:
    element: int
    points: int

    @strawberry.field
    async def player(self, info: strawberry.Info) -> PlayerType | None:
        return await _player_or_none(info, self.element)

    @classmethod
    def from_domain(cls, top: TopElementInfo) -> "TopElementInfoType":
        return cls(element=top.element, points=top.points)


@strawberry.type(name="EventResult")
class EventResultType:
    event: int
    average_entry_score: int
    finished: bool
    highest_scoring_entry: int
    highest_score: int
    chip_plays: list[ChipPlayType]
    most_selected: int
    most_transferred_in: int
    top_element_info: TopElementInfoType
    transfers_made: int
    most_captained: int
    most_vice_captained: int

    @strawberry.field
    async def most_selected_player(self, info: strawberry.Info) -> PlayerType | None:
        return await _player_or_none(info, self.most_selected)

    @strawberry.field
    async def most_transferred_in_player(self, info: strawberry.Info) -> PlayerType | None:
        return await _player_or_none(info, self.most_transferred_in)

    @strawberry.field
    async def most_captained_player(self, info: strawberry.Info) -> PlayerType | None:
        return await _player_or_none(info, self.most_captained)

    @strawberry.field
    async def most_vice_captained_player(self, info: strawberry.Info) -> PlayerType | None:
        return await _player_or_none(info, self.most_vice_captained)

    @classmethod
    def from_domain(cls, result: EventResult) -> "EventResultType":
        return cls(
            event=result.event,
            average_entry_score=result.average_entry_score,
            finished=result.finished,
            highest_scoring_entry=result.highest_scoring_entry,
            highest_score=result.highest_score,
            chip_plays=[ChipPlayType.from_domain(c) for c in result.chip_plays],
            most_selected=result.most_selected,
            most_transferred_in=result.most_transferred_in,
            top_element_info=TopElementInfoType.from_domain(result.top_element_info),
            transfers_made=result.transfers_made,
            most_captained=result.most_captained,
            most_vice_captained=result.most_vice_captained,
        )


@strawberry.type
class EventResultQuery:
    @strawberry.field
    async def event_overall_result(self, info: strawberry.Info, season: int) -> list[EventResultType]:
        results = await get_services(info).event_results.get_event_overall_result(season)
        return [EventResultType.from_domain(r) for r in results]

"""GraphQL surface for fpl_leagues.

Standing and result rows carry their league inline; a result row has no
league name, so ``league.name`` is empty there.
"""

from enum import Enum

import strawberry

from src.fpl_events.api.schema import EventType
from src.fpl_gateway.graphql.context import get_services
from src.fpl_leagues.domain.models import League, LeagueEventResult, LeagueStanding, LeagueType


@strawberry.enum(name="LeagueType")
class LeagueTypeEnum(Enum):
    CLASSIC = "CLASSIC"
    H2H = "H2H"

    @classmethod
    def from_domain(cls, league_type: LeagueType) -> "LeagueTypeEnum":
        return cls.H2H if league_type is LeagueType.H2H else cls.CLASSIC


@strawberry.type(name="League")
class LeagueInfoType:
    id: int
    name: str
    type: LeagueTypeEnum
    started_event: int | None

    @classmethod
    def from_domain(cls, league: League) -> "LeagueInfoType":
        return cls(
            id=league.id,
            name=league.name,
            type=LeagueTypeEnum.from_domain(league.type),
            started_event=league.started_event,
        )


@strawberry.type(name="LeagueStanding")
class LeagueStandingType:
    league: LeagueInfoType
    entry_id: int
    entry_name: str | None
    player_name: str | None
    rank: int | None
    last_rank: int | None
    overall_points: int

    @classmethod
    def from_domain(cls, standing: LeagueStanding) -> "LeagueStandingType":
        league = LeagueInfoType(
            id=standing.league_id,
            name=standing.league_name,
            type=LeagueTypeEnum.from_domain(standing.league_type),
            started_event=standing.started_event,
        )
        return cls(
            league=league,
            entry_id=standing.entry_id,
            entry_name=standing.entry_name,
            player_name=standing.player_name,
            rank=standing.rank,
            last_rank=standing.last_rank,
            overall_points=standing.overall_points,
        )


@strawberry.type(name="LeagueEventResult")
class LeagueEventResultType:
    league: LeagueInfoType
    entry_id: int
    entry_name: str | None
    player_name: str | None
    event_points: int
    event_rank: int | None
    overall_points: int
    overall_rank: int
    event_id: strawberry.Private[int]

    @strawberry.field
    async def event(self, info: strawberry.Info) -> EventType | None:
        event = await get_services(info).events.get_event(self.event_id)
        return EventType.from_domain(event) if event else None

    @classmethod
    def from_domain(cls, result: LeagueEventResult) -> "LeagueEventResultType":
        league = LeagueInfoType(
            id=result.league_id,
            name="",
            type=LeagueTypeEnum.from_domain(result.league_type),
            started_event=None,
        )
        return cls(
            league=league,
            entry_id=result.entry_id,
            entry_name=result.entry_name,
            player_name=result.player_name,
            event_points=result.event_points,
            event_rank=result.event_rank,
            overall_points=result.overall_points,
            overall_rank=result.overall_rank,
            event_id=result.event_id,
        )


@strawberry.type
class LeagueQuery:
    @strawberry.field
    async def entry_leagues(self, info: strawberry.Info, entry_id: int) -> list[LeagueInfoType]:
        leagues = await get_services(info).leagues.get_entry_leagues(entry_id)
        return [LeagueInfoType.from_domain(league) for league in leagues]

    @strawberry.field
    async def league_standings(
        self, info: strawberry.Info, league_id: int, limit: int = 50
    ) -> list[LeagueStandingType]:
        standings = await get_services(info).leagues.get_league_standings(league_id, limit)
        return [LeagueStandingType.from_domain(s) for s in standings]

    @strawberry.field
    async def league_event_results(
        self, info: strawberry.Info, league_id: int, event_id: int
    ) -> list[LeagueEventResultType]:
        results = await get_services(info).leagues.get_league_event_results(league_id, event_id)
        return [LeagueEventResultType.from_domain(r) for r in results]

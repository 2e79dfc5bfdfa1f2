"""GraphQL surface for fpl_fixtures."""

import strawberry

from src.fpl_events.api.schema import EventType
from src.fpl_fixtures.domain.models import Fixture, FixturesFilter
from src.fpl_gateway.graphql.context import get_services
from src.fpl_players.api.schema import TeamType


@strawberry.type(name="Fixture")
class FixtureType:
    id: int
    code: int
    finished: bool
    finished_provisional: bool
    kickoff_time: str | None
    minutes: int
    started: bool | None
    home_score: int | None
    away_score: int | None
    home_team_difficulty: int | None
    away_team_difficulty: int | None
    event_id: strawberry.Private[int | None]
    team_h_id: strawberry.Private[int]
    team_a_id: strawberry.Private[int]

    @strawberry.field
    async def event(self, info: strawberry.Info) -> EventType | None:
        if self.event_id is None:
            return None
        event = await get_services(info).events.get_event(self.event_id)
        return EventType.from_domain(event) if event else None

    @strawberry.field
    async def home_team(self, info: strawberry.Info) -> TeamType | None:
        team = await get_services(info).players.get_team(self.team_h_id)
        return TeamType.from_domain(team) if team else None

    @strawberry.field
    async def away_team(self, info: strawberry.Info) -> TeamType | None:
        team = await get_services(info).players.get_team(self.team_a_id)
        return TeamType.from_domain(team) if team else None

    @classmethod
    def from_domain(cls, fixture: Fixture) -> "FixtureType":
        return cls(
            id=fixture.id,
            code=fixture.code,
            finished=fixture.finished,
            finished_provisional=fixture.finished_provisional,
            kickoff_time=fixture.kickoff_time,
            minutes=fixture.minutes,
            started=fixture.started,
            home_score=fixture.team_h_score,
            away_score=fixture.team_a_score,
            home_team_difficulty=fixture.team_h_difficulty,
            away_team_difficulty=fixture.team_a_difficulty,
            event_id=fixture.event_id,
            team_h_id=fixture.team_h_id,
            team_a_id=fixture.team_a_id,
        )


@strawberry.input(name="FixturesFilter")
class FixturesFilterInput:
    event_id: int | None = None
    team_id: int | None = None
    finished: bool | None = None

    def to_domain(self) -> FixturesFilter:
        return FixturesFilter(event_id=self.event_id, team_id=self.team_id, finished=self.finished)


@strawberry.type
class FixtureQuery:
    @strawberry.field
    async def fixture(self, info: strawberry.Info, id: int) -> FixtureType | None:
        fixture = await get_services(info).fixtures.get_fixture(id)
        return FixtureType.from_domain(fixture) if fixture else None

    @strawberry.field
    async def fixtures(
        self,
        info: strawberry.Info,
        filter: FixturesFilterInput | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[FixtureType]:
        domain_filter = filter.to_domain() if filter else None
        fixtures = await get_services(info).fixtures.list_fixtures(domain_filter, limit, offset)
        return [FixtureType.from_domain(f) for f in fixtures]

    @strawberry.field
    async def current_fixtures(self, info: strawberry.Info) -> list[FixtureType]:
        fixtures = await get_services(info).fixtures.get_current_fixtures()
        return [FixtureType.from_domain(f) for f in fixtures]

    @strawberry.field
    async def event_fixtures(self, info: strawberry.Info, event_id: int) -> list[FixtureType]:
        fixtures = await get_services(info).fixtures.get_event_fixtures(event_id)
        return [FixtureType.from_domain(f) for f in fixtures]

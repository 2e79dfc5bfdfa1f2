"""GraphQL surface for fpl_live.

Query fields:
  liveScores(eventId, filter)     — current event when eventId is omitted
  playerLive(playerId, eventId)
  eventLive(eventId)              — adds dreamTeam / topPerformers(limit)
"""

import strawberry

from src.fpl_cache.coerce import as_float
from src.fpl_events.api.schema import EventType
from src.fpl_gateway.graphql.context import get_services
from src.fpl_live.domain.models import EventLive, LivePerformance, LiveScoresFilter
from src.fpl_players.api.schema import PlayerType


def _expected(value: str | None) -> float | None:
    return as_float(value, None) if value else None


@strawberry.type(name="LivePerformance")
class LivePerformanceType:
    minutes: int | None
    goals_scored: int | None
    assists: int | None
    clean_sheets: int | None
    goals_conceded: int | None
    own_goals: int | None
    penalties_saved: int | None
    penalties_missed: int | None
    yellow_cards: int | None
    red_cards: int | None
    saves: int | None
    bonus: int | None
    bps: int | None
    starts: bool | None
    expected_goals: float | None
    expected_assists: float | None
    expected_goal_involvements: float | None
    expected_goals_conceded: float | None
    in_dream_team: bool | None
    total_points: int
    event_id: strawberry.Private[int]
    player_id: strawberry.Private[int]

    @strawberry.field
    async def event(self, info: strawberry.Info) -> EventType | None:
        event = await get_services(info).events.get_event(self.event_id)
        return EventType.from_domain(event) if event else None

    @strawberry.field
    async def player(self, info: strawberry.Info) -> PlayerType | None:
        player = await get_services(info).players.get_player(self.player_id)
        return PlayerType.from_domain(player) if player else None

    @classmethod
    def from_domain(cls, perf: LivePerformance) -> "LivePerformanceType":
        data = perf.model_dump()
        for name in (
            "expected_goals",
            "expected_assists",
            "expected_goal_involvements",
            "expected_goals_conceded",
        ):
            data[name] = _expected(data[name])
        return cls(**data)


@strawberry.type(name="EventLive")
class EventLiveType:
    event_id: int
    source: strawberry.Private[EventLive]

    @strawberry.field
    async def event(self, info: strawberry.Info) -> EventType | None:
        event = await get_services(info).events.get_event(self.event_id)
        return EventType.from_domain(event) if event else None

    @strawberry.field
    def performances(self) -> list[LivePerformanceType]:
        return [LivePerformanceType.from_domain(p) for p in self.source.performances]

    @strawberry.field
    def dream_team(self) -> list[LivePerformanceType]:
        return [LivePerformanceType.from_domain(p) for p in self.source.dream_team()]

    @strawberry.field
    def top_performers(self, limit: int = 10) -> list[LivePerformanceType]:
        return [LivePerformanceType.from_domain(p) for p in self.source.top_performers(limit)]

    @classmethod
    def from_domain(cls, event_live: EventLive) -> "EventLiveType":
        return cls(event_id=event_live.event_id, source=event_live)


@strawberry.input(name="LiveScoresFilter")
class LiveScoresFilterInput:
    in_dream_team: bool | None = None
    min_total_points: int | None = None
    max_total_points: int | None = None

    def to_domain(self) -> LiveScoresFilter:
        return LiveScoresFilter(
            in_dream_team=self.in_dream_team,
            min_total_points=self.min_total_points,
            max_total_points=self.max_total_points,
        )


@strawberry.type
class LiveQuery:
    @strawberry.field
    async def live_scores(
        self,
        info: strawberry.Info,
        event_id: int | None = None,
        filter: LiveScoresFilterInput | None = None,
    ) -> list[LivePerformanceType]:
        domain_filter = filter.to_domain() if filter else None
        performances = await get_services(info).live.get_live_scores(event_id, domain_filter)
        return [LivePerformanceType.from_domain(p) for p in performances]

    @strawberry.field
    async def player_live(
        self, info: strawberry.Info, player_id: int, event_id: int | None = None
    ) -> LivePerformanceType | None:
        perf = await get_services(info).live.get_player_live(player_id, event_id)
        return LivePerformanceType.from_domain(perf) if perf else None

    @strawberry.field
    async def event_live(self, info: strawberry.Info, event_id: int) -> EventLiveType:
        event_live = await get_services(info).live.get_event_live(event_id)
        return EventLiveType.from_domain(event_live)

"""GraphQL surface for fpl_players.

Player.team and PlayerTransferStats.player are resolved lazily through the
service, so they are served from the identity cache after the first hit.
"""

import strawberry

from src.fpl_gateway.graphql.context import get_services
from src.fpl_players.domain.models import (
    Player,
    PlayersFilter,
    PlayerTransferStats,
    Position,
    Team,
)

PositionEnum = strawberry.enum(Position, name="Position")


@strawberry.type(name="Team")
class TeamType:
    id: int
    code: int
    name: str
    short_name: str
    strength: int
    position: int
    points: int
    played: int
    win: int
    draw: int
    loss: int
    form: str | None
    strength_overall_home: int
    strength_overall_away: int
    strength_attack_home: int
    strength_attack_away: int
    strength_defence_home: int
    strength_defence_away: int

    @classmethod
    def from_domain(cls, team: Team) -> "TeamType":
        return cls(**team.model_dump())


@strawberry.type(name="Player")
class PlayerType:
    id: int
    code: int
    web_name: str
    first_name: str | None
    second_name: str | None
    position: PositionEnum
    price: int
    start_price: int
    team_id: strawberry.Private[int]

    @strawberry.field
    async def team(self, info: strawberry.Info) -> TeamType | None:
        team = await get_services(info).players.get_team(self.team_id)
        return TeamType.from_domain(team) if team else None

    @classmethod
    def from_domain(cls, player: Player) -> "PlayerType":
        return cls(
            id=player.id,
            code=player.code,
            web_name=player.web_name,
            first_name=player.first_name,
            second_name=player.second_name,
            position=player.position,
            price=player.price,
            start_price=player.start_price,
            team_id=player.team_id,
        )


@strawberry.type(name="PlayerTransferStats")
class PlayerTransferStatsType:
    event_id: int
    transfers_in_event: int
    transfers_out_event: int
    player_id: strawberry.Private[int]

    @strawberry.field
    async def player(self, info: strawberry.Info) -> PlayerType | None:
        player = await get_services(info).players.get_player(self.player_id)
        return PlayerType.from_domain(player) if player else None

    @classmethod
    def from_domain(cls, stats: PlayerTransferStats) -> "PlayerTransferStatsType":
        return cls(
            event_id=stats.event_id,
            transfers_in_event=stats.transfers_in_event,
            transfers_out_event=stats.transfers_out_event,
            player_id=stats.player_id,
        )


@strawberry.input(name="PlayersFilter")
class PlayersFilterInput:
    position: PositionEnum | None = None
    team_id: int | None = None
    min_price: int | None = None
    max_price: int | None = None

    def to_domain(self) -> PlayersFilter:
        return PlayersFilter(
            position=self.position,
            team_id=self.team_id,
            min_price=self.min_price,
            max_price=self.max_price,
        )


@strawberry.type
class PlayerQuery:
    @strawberry.field
    async def player(self, info: strawberry.Info, id: int) -> PlayerType | None:
        player = await get_services(info).players.get_player(id)
        return PlayerType.from_domain(player) if player else None

    @strawberry.field
    async def players(
        self,
        info: strawberry.Info,
        filter: PlayersFilterInput | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[PlayerType]:
        domain_filter = filter.to_domain() if filter else None
        players = await get_services(info).players.list_players(domain_filter, limit, offset)
        return [PlayerType.from_domain(p) for p in players]

    @strawberry.field
    async def team(self, info: strawberry.Info, id: int) -> TeamType | None:
        team = await get_services(info).players.get_team(id)
        return TeamType.from_domain(team) if team else None

    @strawberry.field
    async def teams(self, info: strawberry.Info) -> list[TeamType]:
        teams = await get_services(info).players.list_teams()
        return [TeamType.from_domain(t) for t in teams]

    @strawberry.field
    async def top_transfers_in(
        self, info: strawberry.Info, event_id: int, limit: int = 10
    ) -> list[PlayerTransferStatsType]:
        stats = await get_services(info).players.get_top_transfers_in(event_id, limit)
        return [PlayerTransferStatsType.from_domain(s) for s in stats]

    @strawberry.field
    async def top_transfers_out(
        self, info: strawberry.Info, event_id: int, limit: int = 10
    ) -> list[PlayerTransferStatsType]:
        stats = await get_services(info).players.get_top_transfers_out(event_id, limit)
        return [PlayerTransferStatsType.from_domain(s) for s in stats]

"""GraphQL surface for fpl_player_values."""

from datetime import datetime

import strawberry

from src.fpl_gateway.graphql.context import get_services
from src.fpl_player_values.domain.models import PlayerValue


@strawberry.type(name="PlayerValue")
class PlayerValueType:
    player_id: int
    player_name: str
    team_id: int
    team_name: str
    position: str
    price: int
    value: float
    last_value: float
    points: int
    selected_by: float
    transfers_in: int
    transfers_out: int
    net_transfers: int
    form: float | None
    total_points: int
    event_points: int | None

    @classmethod
    def from_domain(cls, value: PlayerValue) -> "PlayerValueType":
        return cls(**value.model_dump())


@strawberry.type
class PlayerValueQuery:
    @strawberry.field
    async def player_values(
        self, info: strawberry.Info, change_date: datetime | None = None
    ) -> list[PlayerValueType]:
        values = await get_services(info).player_values.get_player_values(change_date)
        return [PlayerValueType.from_domain(v) for v in values]

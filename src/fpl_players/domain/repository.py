"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from src.fpl_players.domain.models import Player, PlayersFilter, PlayerTransferStats, Team


class PlayerRepositoryProtocol(Protocol):
    async def get_player_by_id(self, player_id: int) -> Player | None: ...

    async def list_players(
        self,
        filter_: PlayersFilter | None,
        limit: int,
        offset: int,
    ) -> list[Player]: ...

    async def get_team_by_id(self, team_id: int) -> Team | None: ...

    async def list_teams(self) -> list[Team]: ...

    async def get_top_transfers_in(self, event_id: int, limit: int) -> list[PlayerTransferStats]: ...

    async def get_top_transfers_out(self, event_id: int, limit: int) -> list[PlayerTransferStats]: ...

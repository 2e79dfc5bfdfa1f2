"""PlayerApplicationService — pass-through over PlayerRepository."""

from src.fpl_players.domain.models import Player, PlayersFilter, PlayerTransferStats, Team
from src.fpl_players.domain.repository import PlayerRepositoryProtocol


class PlayerApplicationService:
    def __init__(self, repo: PlayerRepositoryProtocol) -> None:
        self._repo = repo

    async def get_player(self, player_id: int) -> Player | None:
        return await self._repo.get_player_by_id(player_id)

    async def list_players(
        self,
        filter_: PlayersFilter | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Player]:
        return await self._repo.list_players(filter_, limit, offset)

    async def get_team(self, team_id: int) -> Team | None:
        return await self._repo.get_team_by_id(team_id)

    async def list_teams(self) -> list[Team]:
        return await self._repo.list_teams()

    async def get_top_transfers_in(self, event_id: int, limit: int = 10) -> list[PlayerTransferStats]:
        return await self._repo.get_top_transfers_in(event_id, limit)

    async def get_top_transfers_out(self, event_id: int, limit: int = 10) -> list[PlayerTransferStats]:
        return await self._repo.get_top_transfers_out(event_id, limit)

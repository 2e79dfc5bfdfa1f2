"""PlayerValueApplicationService — pass-through over PlayerValueRepository."""

from datetime import date, datetime

from src.fpl_player_values.domain.models import PlayerValue
from src.fpl_player_values.domain.repository import PlayerValueRepositoryProtocol


class PlayerValueApplicationService:
    def __init__(self, repo: PlayerValueRepositoryProtocol) -> None:
        self._repo = repo

    async def get_player_values(self, change_date: date | datetime | None = None) -> list[PlayerValue]:
        return await self._repo.get_player_values(change_date)

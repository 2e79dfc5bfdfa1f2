"""LiveApplicationService — pass-through over LiveRepository."""

from src.fpl_live.domain.models import EventLive, LivePerformance, LiveScoresFilter
from src.fpl_live.domain.repository import LiveRepositoryProtocol


class LiveApplicationService:
    def __init__(self, repo: LiveRepositoryProtocol) -> None:
        self._repo = repo

    async def get_live_scores(
        self,
        event_id: int | None = None,
        filter_: LiveScoresFilter | None = None,
    ) -> list[LivePerformance]:
        return await self._repo.get_live_scores(event_id, filter_)

    async def get_player_live(self, player_id: int, event_id: int | None = None) -> LivePerformance | None:
        return await self._repo.get_player_live(player_id, event_id)

    async def get_event_live(self, event_id: int) -> EventLive:
        return await self._repo.get_event_live(event_id)

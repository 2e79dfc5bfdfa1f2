"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from src.fpl_live.domain.models import EventLive, LivePerformance, LiveScoresFilter


class LiveRepositoryProtocol(Protocol):
    async def get_live_scores(
        self,
        event_id: int | None,
        filter_: LiveScoresFilter | None,
    ) -> list[LivePerformance]: ...

    async def get_player_live(self, player_id: int, event_id: int | None) -> LivePerformance | None: ...

    async def get_event_live(self, event_id: int) -> EventLive: ...

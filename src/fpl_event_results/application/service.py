"""EventResultApplicationService — pass-through over EventResultRepository."""

from src.fpl_event_results.domain.models import EventResult
from src.fpl_event_results.domain.repository import EventResultRepositoryProtocol


class EventResultApplicationService:
    def __init__(self, repo: EventResultRepositoryProtocol) -> None:
        self._repo = repo

    async def get_event_overall_result(self, season: int) -> list[EventResult]:
        return await self._repo.get_event_overall_result(season)

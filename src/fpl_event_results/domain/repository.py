"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from src.fpl_event_results.domain.models import EventResult


class EventResultRepositoryProtocol(Protocol):
    async def get_event_overall_result(self, season: int) -> list[EventResult]: ...

"""Repository Protocol — dependency inversion for testability."""

from datetime import date, datetime
from typing import Protocol

from src.fpl_player_values.domain.models import PlayerValue


class PlayerValueRepositoryProtocol(Protocol):
    async def get_player_values(self, change_date: date | datetime | None) -> list[PlayerValue]: ...

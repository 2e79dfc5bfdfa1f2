"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from src.fpl_leagues.domain.models import League, LeagueEventResult, LeagueStanding


class LeagueRepositoryProtocol(Protocol):
    async def get_entry_leagues(self, entry_id: int) -> list[League]: ...

    async def get_league_standings(self, league_id: int, limit: int) -> list[LeagueStanding]: ...

    async def get_league_event_results(self, league_id: int, event_id: int) -> list[LeagueEventResult]: ...

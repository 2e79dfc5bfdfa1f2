"""LeagueApplicationService — pass-through over LeagueRepository."""

from src.fpl_leagues.domain.models import League, LeagueEventResult, LeagueStanding
from src.fpl_leagues.domain.repository import LeagueRepositoryProtocol


class LeagueApplicationService:
    def __init__(self, repo: LeagueRepositoryProtocol) -> None:
        self._repo = repo

    async def get_entry_leagues(self, entry_id: int) -> list[League]:
        return await self._repo.get_entry_leagues(entry_id)

    async def get_league_standings(self, league_id: int, limit: int = 50) -> list[LeagueStanding]:
        return await self._repo.get_league_standings(league_id, limit)

    async def get_league_event_results(self, league_id: int, event_id: int) -> list[LeagueEventResult]:
        return await self._repo.get_league_event_results(league_id, event_id)

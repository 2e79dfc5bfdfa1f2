"""FixtureApplicationService — pass-through over FixtureRepository."""

from src.fpl_fixtures.domain.models import Fixture, FixturesFilter
from src.fpl_fixtures.domain.repository import FixtureRepositoryProtocol


class FixtureApplicationService:
    def __init__(self, repo: FixtureRepositoryProtocol) -> None:
        self._repo = repo

    async def get_fixture(self, fixture_id: int) -> Fixture | None:
        return await self._repo.get_fixture_by_id(fixture_id)

    async def list_fixtures(
        self,
        filter_: FixturesFilter | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Fixture]:
        return await self._repo.list_fixtures(filter_, limit, offset)

    async def get_current_fixtures(self) -> list[Fixture]:
        return await self._repo.get_current_fixtures()

    async def get_event_fixtures(self, event_id: int) -> list[Fixture]:
        return await self._repo.get_event_fixtures(event_id)

"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from src.fpl_fixtures.domain.models import Fixture, FixturesFilter


class FixtureRepositoryProtocol(Protocol):
    async def get_fixture_by_id(self, fixture_id: int) -> Fixture | None: ...

    async def list_fixtures(
        self,
        filter_: FixturesFilter | None,
        limit: int,
        offset: int,
    ) -> list[Fixture]: ...

    async def get_current_fixtures(self) -> list[Fixture]: ...

    async def get_event_fixtures(self, event_id: int) -> list[Fixture]: ...

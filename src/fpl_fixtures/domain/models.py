"""Domain models for fpl_fixtures."""

from src.fpl_common.models import CamelModel


class Fixture(CamelModel):
    id: int
    code: int
    event_id: int | None = None
    finished: bool = False
    finished_provisional: bool = False
    kickoff_time: str | None = None
    minutes: int = 0
    started: bool | None = None
    team_h_id: int
    team_a_id: int
    team_h_score: int | None = None
    team_a_score: int | None = None
    team_h_difficulty: int | None = None
    team_a_difficulty: int | None = None


class FixturesFilter(CamelModel):
    event_id: int | None = None
    # Matches either side of the fixture.
    team_id: int | None = None
    finished: bool | None = None

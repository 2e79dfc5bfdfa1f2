"""Domain models for fpl_leagues."""

from enum import Enum

from src.fpl_common.models import CamelModel


class LeagueType(str, Enum):
    CLASSIC = "classic"
    H2H = "h2h"


def league_type_from_db(value: str | None) -> LeagueType:
    """Only ``h2h`` is head-to-head; every other stored value is classic."""
    return LeagueType.H2H if value == LeagueType.H2H.value else LeagueType.CLASSIC


class League(CamelModel):
    id: int
    name: str
    type: LeagueType
    started_event: int | None = None


class LeagueStanding(CamelModel):
    league_id: int
    league_name: str
    league_type: LeagueType
    entry_id: int
    # entry_league_infos carries no names or points; not joined here.
    entry_name: str | None = None
    player_name: str | None = None
    rank: int | None = None
    last_rank: int | None = None
    overall_points: int = 0
    started_event: int | None = None


class LeagueEventResult(CamelModel):
    league_id: int
    league_type: LeagueType
    event_id: int
    entry_id: int
    entry_name: str | None = None
    player_name: str | None = None
    event_points: int = 0
    event_rank: int | None = None
    overall_points: int = 0
    overall_rank: int = 0

"""Domain models for fpl_players — players, teams and transfer stats."""

from enum import IntEnum
from typing import Any

from src.fpl_common.models import CamelModel


class Position(IntEnum):
    GOALKEEPER = 1
    DEFENDER = 2
    MIDFIELDER = 3
    FORWARD = 4


def position_from_type(element_type: Any) -> Position:
    """Feed element type → Position; anything unrecognised is a midfielder."""
    try:
        return Position(int(element_type))
    except (TypeError, ValueError):
        return Position.MIDFIELDER


class Team(CamelModel):
    id: int
    code: int
    name: str
    short_name: str
    strength: int = 0
    position: int = 0
    points: int = 0
    played: int = 0
    win: int = 0
    draw: int = 0
    loss: int = 0
    form: str | None = None
    strength_overall_home: int = 0
    strength_overall_away: int = 0
    strength_attack_home: int = 0
    strength_attack_away: int = 0
    strength_defence_home: int = 0
    strength_defence_away: int = 0


class Player(CamelModel):
    id: int
    code: int
    web_name: str
    first_name: str | None = None
    second_name: str | None = None
    team_id: int
    position: Position
    price: int
    start_price: int


class PlayersFilter(CamelModel):
    position: Position | None = None
    team_id: int | None = None
    min_price: int | None = None
    max_price: int | None = None


class PlayerTransferStats(CamelModel):
    player_id: int
    event_id: int
    transfers_in_event: int = 0
    transfers_out_event: int = 0

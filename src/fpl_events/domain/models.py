"""Domain models for fpl_events — camelCase on the cache wire."""

from typing import Any

from src.fpl_common.models import CamelModel


class Event(CamelModel):
    id: int
    name: str
    deadline_time: str | None = None
    average_entry_score: int | None = None
    finished: bool = False
    data_checked: bool = False
    highest_scoring_entry: int | None = None
    deadline_time_epoch: int | None = None
    deadline_time_game_offset: int | None = None
    highest_score: int | None = None
    is_previous: bool = False
    is_current: bool = False
    is_next: bool = False
    cup_league_create: bool = False
    h2h_ko_matches_created: bool = False
    chip_plays: list[Any] | None = None
    most_selected: int | None = None
    most_transferred_in: int | None = None
    top_element: int | None = None
    top_element_info: Any | None = None
    transfers_made: int | None = None
    most_captained: int | None = None
    most_vice_captained: int | None = None


class EventsFilter(CamelModel):
    is_previous: bool | None = None
    is_current: bool | None = None
    is_next: bool | None = None
    finished: bool | None = None
    data_checked: bool | None = None


class CurrentEventInfo(CamelModel):
    current_event: int
    next_utc_deadline: str | None = None

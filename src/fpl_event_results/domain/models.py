"""Domain models for fpl_event_results — season-wide per-event aggregates."""

from typing import Any

from pydantic import Field

from src.fpl_cache.coerce import as_bool, as_int, as_mapping, as_str, pick
from src.fpl_common.models import CamelModel


class ChipPlay(CamelModel):
    chip_name: str
    number_played: int


class TopElementInfo(CamelModel):
    element: int = 0
    points: int = 0


class EventResult(CamelModel):
    event: int
    average_entry_score: int = 0
    finished: bool = False
    highest_scoring_entry: int = 0
    highest_score: int = 0
    chip_plays: list[ChipPlay] = Field(default_factory=list)
    most_selected: int = 0
    most_transferred_in: int = 0
    top_element_info: TopElementInfo = Field(default_factory=TopElementInfo)
    transfers_made: int = 0
    most_captained: int = 0
    most_vice_captained: int = 0


def parse_chip_plays(value: Any) -> list[ChipPlay]:
    """Accepts the camelCase producer format and the raw feed (chip_name/num_played)."""
    if not isinstance(value, list):
        return []
    chips = []
    for raw in value:
        chip = as_mapping(raw)
        if chip is None:
            continue
        chips.append(
            ChipPlay(
                chip_name=as_str(pick(chip, "chipName", "chip_name")),
                number_played=as_int(pick(chip, "numberPlayed", "num_played")),
            )
        )
    return chips


def parse_top_element_info(value: Any) -> TopElementInfo:
    info = as_mapping(value)
    if info is None:
        return TopElementInfo()
    return TopElementInfo(
        element=as_int(pick(info, "element", "id")),
        points=as_int(info.get("points")),
    )


def event_result_from_cache(data: Any) -> EventResult | None:
    item = as_mapping(data)
    if item is None:
        return None
    return EventResult(
        event=as_int(item.get("event")),
        average_entry_score=as_int(item.get("averageEntryScore")),
        finished=as_bool(item.get("finished")),
        highest_scoring_entry=as_int(item.get("highestScoringEntry")),
        highest_score=as_int(item.get("highestScore")),
        chip_plays=parse_chip_plays(item.get("chipPlays")),
        most_selected=as_int(item.get("mostSelected")),
        most_transferred_in=as_int(item.get("mostTransferredIn")),
        top_element_info=parse_top_element_info(item.get("topElementInfo")),
        transfers_made=as_int(item.get("transfersMade")),
        most_captained=as_int(item.get("mostCaptained")),
        most_vice_captained=as_int(item.get("mostViceCaptained")),
    )

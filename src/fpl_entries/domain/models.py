"""Domain models for fpl_entries — a manager's team and per-event results."""

from src.fpl_common.models import CamelModel


class Entry(CamelModel):
    id: int
    entry_name: str
    player_name: str
    region: str | None = None
    started_event: int | None = None
    overall_points: int | None = None
    overall_rank: int | None = None
    bank: int | None = None
    team_value: int | None = None
    total_transfers: int | None = None


class EntryEventResult(CamelModel):
    entry_id: int
    event_id: int
    event_points: int = 0
    event_rank: int | None = None
    overall_points: int = 0
    overall_rank: int = 0
    event_transfers: int = 0
    event_transfers_cost: int = 0
    event_net_points: int = 0
    team_value: int | None = None
    bank: int | None = None

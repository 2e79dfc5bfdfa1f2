"""Domain models for fpl_player_values — daily price/ownership snapshot."""

from collections.abc import Mapping
from typing import Any

from src.fpl_cache.coerce import as_float, as_int, as_mapping, as_str, pick
from src.fpl_common.models import CamelModel


class PlayerValue(CamelModel):
    player_id: int
    player_name: str
    team_id: int
    team_name: str
    position: str
    price: int
    value: float
    last_value: float
    points: int
    selected_by: float
    transfers_in: int
    transfers_out: int
    net_transfers: int
    form: float | None = None
    total_points: int
    event_points: int | None = None


def player_value_from_cache(data: Any) -> PlayerValue | None:
    """Build a PlayerValue from one producer record.

    Producers have used several field names over time; the first non-null
    name wins. Missing counters default to 0, missing text to "".
    """
    item: Mapping[str, Any] | None = as_mapping(data)
    if item is None:
        return None

    points = as_int(pick(item, "points", "totalPoints"))
    transfers_in = as_int(pick(item, "transfersIn", "transfersInEvent"))
    transfers_out = as_int(pick(item, "transfersOut", "transfersOutEvent"))
    # An explicit null eventPoints stays null; only a missing key falls back.
    event_points = item["eventPoints"] if "eventPoints" in item else item.get("points")

    return PlayerValue(
        player_id=as_int(pick(item, "playerId", "elementId")),
        player_name=as_str(pick(item, "playerName", "webName")),
        team_id=as_int(item.get("teamId")),
        team_name=as_str(item.get("teamName")),
        position=as_str(pick(item, "position", "elementTypeName")),
        price=as_int(pick(item, "price", "nowCost")),
        value=as_float(item.get("value")),
        last_value=as_float(item.get("lastValue")),
        points=points,
        selected_by=as_float(pick(item, "selectedBy", "selectedByPercent")),
        transfers_in=transfers_in,
        transfers_out=transfers_out,
        net_transfers=as_int(item.get("netTransfers"), transfers_in - transfers_out),
        form=as_float(item.get("form"), None),
        total_points=as_int(item.get("totalPoints"), points),
        event_points=as_int(event_points, None),
    )

# tests/unit/test_cache_decoder.py
"""Unit tests for the heterogeneous cache decoder."""
import json
import logging

import pytest

from src.fpl_cache.decoder import DecodeStatus, decode_shape
from src.fpl_cache.shapes import (
    Absent,
    HashShape,
    ListShape,
    SetShape,
    StringShape,
    UnsupportedShape,
)
from src.fpl_event_results.domain.models import event_result_from_cache
from src.fpl_player_values.domain.models import PlayerValue, player_value_from_cache


def _value(player_id: int, **extra) -> dict:
    return {"playerId": player_id, "playerName": f"P{player_id}", "price": 50, **extra}


class TestAbsentAndUnsupported:
    def test_absent(self):
        result = decode_shape(Absent("k"), player_value_from_cache)
        assert result.status is DecodeStatus.ABSENT
        assert result.records == []

    def test_unsupported_logs_error(self, caplog):
        with caplog.at_level(logging.ERROR):
            result = decode_shape(UnsupportedShape("k", "zset"), player_value_from_cache)
        assert result.status is DecodeStatus.UNSUPPORTED
        assert result.records == []
        assert "Unsupported cache type" in caplog.text


class TestStringShape:
    def test_json_array(self):
        text = json.dumps([_value(1), _value(2)])
        result = decode_shape(StringShape("k", text), player_value_from_cache)
        assert result.found
        assert [v.player_id for v in result.records] == [1, 2]

    def test_json_object_values_are_records(self):
        text = json.dumps({"1": _value(1), "2": _value(2)})
        result = decode_shape(StringShape("k", text), player_value_from_cache)
        assert sorted(v.player_id for v in result.records) == [1, 2]

    def test_invalid_elements_skipped(self):
        text = json.dumps([_value(1), 42, "oops", _value(2)])
        result = decode_shape(StringShape("k", text), player_value_from_cache)
        assert [v.player_id for v in result.records] == [1, 2]
        assert result.skipped == 2

    def test_not_json_is_found_but_empty(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = decode_shape(StringShape("k", "{not json"), player_value_from_cache)
        assert result.status is DecodeStatus.FOUND
        assert result.records == []
        assert "not valid JSON" in caplog.text

    def test_scalar_is_empty(self):
        result = decode_shape(StringShape("k", "17"), player_value_from_cache)
        assert result.found
        assert result.records == []


class TestHashShape:
    def test_ten_fields_three_malformed(self, caplog):
        fields = {str(i): json.dumps(_value(i)) for i in range(1, 8)}
        fields["8"] = "{broken"
        fields["9"] = "not json at all"
        fields["10"] = "[1, 2"
        with caplog.at_level(logging.WARNING, logger="src.fpl_cache.decoder"):
            result = decode_shape(HashShape("PlayerValue:20250101", fields), player_value_from_cache)

        assert result.found
        assert len(result.records) == 7
        assert result.skipped == 3
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 3


class TestListAndSetShapes:
    def test_list_order_preserved(self):
        items = [json.dumps(_value(i)) for i in (3, 1, 2)]
        result = decode_shape(ListShape("k", items), player_value_from_cache)
        assert [v.player_id for v in result.records] == [3, 1, 2]

    def test_set_members_decoded(self):
        members = [json.dumps(_value(i)) for i in (1, 2)]
        result = decode_shape(SetShape("k", members), player_value_from_cache)
        assert sorted(v.player_id for v in result.records) == [1, 2]


class TestEventOverallResultScenario:
    def test_hash_sorted_by_event(self):
        fields = {
            "3": json.dumps({"event": 3, "averageEntryScore": 50, "finished": True}),
            "1": json.dumps({"event": 1, "averageEntryScore": 60, "finished": True}),
            "2": json.dumps({"event": 2, "averageEntryScore": 55, "finished": True}),
        }
        result = decode_shape(
            HashShape("EventOverallResult:2025", fields),
            event_result_from_cache,
            sort_key=lambda r: r.event,
        )
        assert [r.event for r in result.records] == [1, 2, 3]
        assert result.records[0].average_entry_score == 60

    def test_missing_numbers_default_to_zero(self):
        result = decode_shape(StringShape("k", json.dumps([{"event": "4"}])), event_result_from_cache)
        record = result.records[0]
        assert record.event == 4
        assert record.highest_score == 0
        assert record.top_element_info.element == 0
        assert record.chip_plays == []


class TestSameRecordsAcrossShapes:
    def test_every_shape_decodes_equal_records(self):
        values = [_value(1), _value(2)]
        encoded = [json.dumps(v) for v in values]
        shapes = [
            StringShape("k", json.dumps(values)),
            HashShape("k", {"1": encoded[0], "2": encoded[1]}),
            ListShape("k", encoded),
            SetShape("k", encoded),
        ]
        decoded = [
            sorted(decode_shape(s, player_value_from_cache).records, key=lambda v: v.player_id)
            for s in shapes
        ]
        assert all(records == decoded[0] for records in decoded)


def _full_value(player_id: int, **overrides) -> PlayerValue:
    defaults = dict(
        player_id=player_id,
        player_name=f"P{player_id}",
        team_id=1,
        team_name="Arsenal",
        position="MID",
        price=101,
        value=10.1,
        last_value=10.0,
        points=60,
        selected_by=45.2,
        transfers_in=1500,
        transfers_out=500,
        net_transfers=1000,
        form=None,
        total_points=60,
        event_points=None,
    )
    defaults.update(overrides)
    return PlayerValue(**defaults)


def _shape_of(kind: str, encoded: list[str]):
    if kind == "string":
        return StringShape("k", "[" + ",".join(encoded) + "]")
    if kind == "hash":
        return HashShape("k", {str(i): text for i, text in enumerate(encoded)})
    if kind == "list":
        return ListShape("k", encoded)
    return SetShape("k", encoded)


class TestNullableFieldsSurviveEveryShape:
    @pytest.mark.parametrize("kind", ["string", "hash", "list", "set"])
    def test_null_form_and_event_points(self, kind):
        values = [_full_value(1), _full_value(2, form=6.5, event_points=0)]
        encoded = [json.dumps(v.model_dump(by_alias=True)) for v in values]

        result = decode_shape(_shape_of(kind, encoded), player_value_from_cache)

        assert sorted(result.records, key=lambda v: v.player_id) == values
        assert result.records and result.skipped == 0

    def test_explicit_null_event_points_is_not_replaced_by_points(self):
        value = player_value_from_cache({"playerId": 1, "points": 12, "eventPoints": None})
        assert value.event_points is None
        assert value.total_points == 12

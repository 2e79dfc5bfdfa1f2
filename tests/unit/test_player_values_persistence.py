# tests/unit/test_player_values_persistence.py
"""Unit tests for PlayerValueRepository (best-effort, date-bucketed)."""
import json
from datetime import date
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.fpl_cache.decoder import decode_shape
from src.fpl_cache.keys import date_token
from src.fpl_cache.shapes import HashShape
from src.fpl_player_values.domain.models import player_value_from_cache
from src.fpl_player_values.infrastructure.persistence import PlayerValueRepository, row_to_player_value


def _make_value_row(**kwargs):
    row = MagicMock()
    row.player_id = kwargs.get("player_id", 302)
    row.player_name = kwargs.get("player_name", "Saka")
    row.team_id = 1
    row.team_name = "Arsenal"
    row.position = "MID"
    row.price = kwargs.get("price", 101)
    row.value = 10.1
    row.last_value = 10.0
    row.points = 60
    row.selected_by = "45.20"
    row.transfers_in = 1500
    row.transfers_out = 500
    row.net_transfers = 1000
    row.form = kwargs.get("form", "6.5")
    row.total_points = 60
    row.event_points = kwargs.get("event_points", 8)
    row.change_date = kwargs.get("change_date", date(2025, 1, 1))
    return row


def _cached_value(player_id: int, **extra) -> str:
    return json.dumps({"playerId": player_id, "playerName": f"P{player_id}", "nowCost": 55, **extra})


def _rows(rows):
    result_mock = MagicMock()
    result_mock.fetchall.return_value = rows
    return result_mock


@pytest.fixture
def repo(sessions, reader):
    return PlayerValueRepository(sessions, reader)


class TestProducerFieldNames:
    def test_alternate_names_and_defaults(self):
        value = player_value_from_cache(
            {"elementId": 7, "webName": "Palmer", "nowCost": "105", "transfersInEvent": 30, "transfersOutEvent": 10}
        )
        assert value.player_id == 7
        assert value.player_name == "Palmer"
        assert value.price == 105
        assert value.net_transfers == 20
        assert value.team_name == ""
        assert value.form is None
        assert value.event_points is None

    def test_points_fallbacks(self):
        value = player_value_from_cache({"playerId": 1, "points": 12})
        assert value.total_points == 12
        assert value.event_points == 12

    def test_non_object_is_not_a_record(self):
        assert player_value_from_cache([1, 2]) is None


class TestCacheMatchesDatabase:
    def test_null_columns_decode_equal_to_row(self):
        row = _make_value_row(form=None, event_points=None)
        from_db = row_to_player_value(row)
        shape = HashShape("PlayerValue:20250101", {"302": json.dumps(from_db.model_dump(by_alias=True))})

        from_cache = decode_shape(shape, player_value_from_cache).records

        assert from_cache == [from_db]
        assert from_cache[0].form is None
        assert from_cache[0].event_points is None


class TestGetPlayerValues:
    @pytest.mark.asyncio
    async def test_hash_bucket_for_date(self, repo, db, fake_redis):
        fake_redis.seed_hash(
            "PlayerValue:20250101",
            {str(i): _cached_value(i) for i in range(1, 8)} | {"8": "{bad", "9": "nope", "10": "[1"},
        )

        values = await repo.get_player_values(date(2025, 1, 1))

        assert len(values) == 7
        db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_database_by_date_when_cache_empty(self, repo, db):
        db.execute.return_value = _rows([_make_value_row()])

        values = await repo.get_player_values(date(2025, 1, 1))

        assert values[0].player_id == 302
        assert values[0].selected_by == 45.2
        assert values[0].form == 6.5
        assert db.execute.call_args.args[1] == {"iso_date": "2025-01-01", "compact_date": "20250101"}

    @pytest.mark.asyncio
    async def test_no_date_serves_latest_bucket(self, repo, db, fake_redis):
        fake_redis.seed_list("PlayerValue:20240101", [_cached_value(1)])
        fake_redis.seed_list("PlayerValue:20240102", [_cached_value(2)])
        # Today's bucket is absent unless the clock says 2024-01-02.
        if date_token() in ("20240101", "20240102"):
            pytest.skip("clock inside the seeded buckets")

        values = await repo.get_player_values(None)

        assert [v.player_id for v in values] == [2]
        db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_date_and_no_cache_reads_latest_rows(self, repo, db):
        db.execute.return_value = _rows([_make_value_row(form=None)])

        values = await repo.get_player_values(None)

        assert values[0].form is None
        assert db.execute.call_args.args[1] == {}

    @pytest.mark.asyncio
    async def test_explicit_date_never_uses_other_buckets(self, repo, db, fake_redis):
        fake_redis.seed_list("PlayerValue:20240102", [_cached_value(2)])
        db.execute.return_value = _rows([])

        assert await repo.get_player_values(date(2025, 1, 1)) == []
        db.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unsupported_type_is_empty_without_database(self, repo, db, fake_redis):
        fake_redis.seed_zset("PlayerValue:20250101", {"a": 1.0})

        assert await repo.get_player_values(date(2025, 1, 1)) == []
        db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_database_failure_is_empty(self, repo, db):
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        assert await repo.get_player_values(date(2025, 1, 1)) == []

    @pytest.mark.asyncio
    async def test_never_writes_cache(self, repo, db, fake_redis):
        db.execute.return_value = _rows([_make_value_row()])

        await repo.get_player_values(date(2025, 1, 1))

        assert fake_redis.set_calls == []

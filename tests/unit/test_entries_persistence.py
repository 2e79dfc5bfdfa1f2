# tests/unit/test_entries_persistence.py
"""Unit tests for EntryRepository."""
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.fpl_common.errors import DataFetchError
from src.fpl_entries.infrastructure.persistence import EntryRepository


def _make_entry_row(**kwargs):
    row = MagicMock()
    row.id = kwargs.get("id", 1001)
    row.entry_name = kwargs.get("entry_name", "Saka Potatoes")
    row.player_name = kwargs.get("player_name", "Sam")
    row.region = kwargs.get("region", "England")
    row.started_event = 1
    row.overall_points = kwargs.get("overall_points", 420)
    row.overall_rank = kwargs.get("overall_rank", 12000)
    row.bank = 5
    row.team_value = 1012
    row.total_transfers = 9
    return row


def _make_result_row(**kwargs):
    row = MagicMock()
    row.entry_id = kwargs.get("entry_id", 1001)
    row.event_id = kwargs.get("event_id", 1)
    row.event_points = kwargs.get("event_points", 70)
    row.event_rank = kwargs.get("event_rank", 300)
    row.overall_points = kwargs.get("overall_points", 70)
    row.overall_rank = kwargs.get("overall_rank", 300)
    row.event_transfers = kwargs.get("event_transfers", None)
    row.event_transfers_cost = kwargs.get("event_transfers_cost", None)
    row.event_net_points = kwargs.get("event_net_points", 70)
    row.team_value = 1000
    row.bank = 0
    return row


def _rows(rows):
    result_mock = MagicMock()
    result_mock.fetchall.return_value = rows
    return result_mock


@pytest.fixture
def repo(sessions, cache):
    return EntryRepository(sessions, cache, ttl_seconds=300)


class TestGetEntry:
    @pytest.mark.asyncio
    async def test_returns_entry(self, repo, db, fake_redis):
        db.execute.return_value = _rows([_make_entry_row()])

        entry = await repo.get_entry_by_id(1001)

        assert entry.entry_name == "Saka Potatoes"
        assert fake_redis.set_calls[0][0] == "entries:id:1001"

    @pytest.mark.asyncio
    async def test_not_found_not_cached(self, repo, db, fake_redis):
        db.execute.return_value = _rows([])

        assert await repo.get_entry_by_id(1) is None
        assert fake_redis.set_calls == []

    @pytest.mark.asyncio
    async def test_db_error(self, repo, db):
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with pytest.raises(DataFetchError, match="Failed to fetch entry"):
            await repo.get_entry_by_id(1)


class TestHistory:
    @pytest.mark.asyncio
    async def test_history_in_event_order(self, repo, db, fake_redis):
        db.execute.return_value = _rows([_make_result_row(event_id=i) for i in (1, 2, 3)])

        history = await repo.get_entry_history(1001)

        assert [h.event_id for h in history] == [1, 2, 3]
        assert history[0].event_transfers == 0
        assert history[0].event_transfers_cost == 0
        assert fake_redis.set_calls[0][0] == "entries:history:1001"


class TestEventResult:
    @pytest.mark.asyncio
    async def test_single_result(self, repo, db, fake_redis):
        db.execute.return_value = _rows([_make_result_row(event_id=7)])

        result = await repo.get_entry_event_result(1001, 7)

        assert result.event_id == 7
        assert db.execute.call_args.args[1] == {"entry_id": 1001, "event_id": 7}
        assert fake_redis.set_calls[0][0] == "entries:result:1001:7"

    @pytest.mark.asyncio
    async def test_missing_result(self, repo, db):
        db.execute.return_value = _rows([])
        assert await repo.get_entry_event_result(1001, 7) is None

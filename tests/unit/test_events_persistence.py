# tests/unit/test_events_persistence.py
"""Unit tests for EventRepository using a mocked session factory and FakeRedis."""
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.fpl_common.errors import DataFetchError
from src.fpl_events.domain.models import EventsFilter
from src.fpl_events.infrastructure.persistence import EventRepository


def _make_event_row(**kwargs):
    """Build a mock events row with all required fields."""
    row = MagicMock()
    row.id = kwargs.get("id", 7)
    row.name = kwargs.get("name", "Gameweek 7")
    row.deadline_time = kwargs.get("deadline_time", datetime(2025, 10, 3, 17, 30, tzinfo=UTC))
    row.average_entry_score = kwargs.get("average_entry_score", 52)
    row.finished = kwargs.get("finished", True)
    row.data_checked = kwargs.get("data_checked", True)
    row.highest_scoring_entry = 1234
    row.deadline_time_epoch = 1759512600
    row.deadline_time_game_offset = 0
    row.highest_score = 131
    row.is_previous = kwargs.get("is_previous", False)
    row.is_current = kwargs.get("is_current", True)
    row.is_next = kwargs.get("is_next", False)
    row.cup_league_create = False
    row.h2h_ko_matches_created = False
    row.chip_plays = kwargs.get("chip_plays", '[{"chip_name": "bboost", "num_played": 100}]')
    row.most_selected = 302
    row.most_transferred_in = 99
    row.top_element = 351
    row.top_element_info = {"id": 351, "points": 21}
    row.transfers_made = 500000
    row.most_captained = 351
    row.most_vice_captained = 302
    return row


def _rows(rows):
    result_mock = MagicMock()
    result_mock.fetchall.return_value = rows
    return result_mock


def _db_error():
    return OperationalError("SELECT", {}, Exception("connection reset"))


@pytest.fixture
def repo(sessions, cache):
    return EventRepository(sessions, cache, ttl_seconds=300)


class TestGetEventById:
    @pytest.mark.asyncio
    async def test_returns_event_when_found(self, repo, db):
        db.execute.return_value = _rows([_make_event_row(id=7)])

        event = await repo.get_event_by_id(7)

        assert event is not None
        assert event.id == 7
        assert event.deadline_time == "2025-10-03T17:30:00+00:00"
        assert event.chip_plays == [{"chip_name": "bboost", "num_played": 100}]
        assert event.top_element_info == {"id": 351, "points": 21}

    @pytest.mark.asyncio
    async def test_returns_none_when_not_found(self, repo, db, fake_redis):
        db.execute.return_value = _rows([])

        assert await repo.get_event_by_id(99) is None
        assert fake_redis.set_calls == []

    @pytest.mark.asyncio
    async def test_second_read_served_from_cache(self, repo, db, fake_redis):
        db.execute.return_value = _rows([_make_event_row(id=7)])

        first = await repo.get_event_by_id(7)
        second = await repo.get_event_by_id(7)

        assert first == second
        assert db.execute.await_count == 1
        assert fake_redis.set_calls[0][0] == "events:id:7"
        assert fake_redis.set_calls[0][2] == 300

    @pytest.mark.asyncio
    async def test_db_error_raises_data_fetch_error(self, repo, db, fake_redis):
        db.execute.side_effect = _db_error()

        with pytest.raises(DataFetchError) as exc_info:
            await repo.get_event_by_id(7)

        assert exc_info.value.message == "Failed to fetch event"
        assert fake_redis.set_calls == []


class TestListEvents:
    @pytest.mark.asyncio
    async def test_returns_list_in_row_order(self, repo, db):
        db.execute.return_value = _rows([_make_event_row(id=i) for i in (1, 2, 3)])

        events = await repo.list_events(None, 50, 0)

        assert [e.id for e in events] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_filter_and_clamped_pagination_passed_to_sql(self, repo, db):
        db.execute.return_value = _rows([])

        await repo.list_events(EventsFilter(finished=True), 1000, -5)

        params = db.execute.call_args.args[1]
        assert params["finished"] is True
        assert params["is_current"] is None
        assert params["limit"] == 200
        assert params["offset"] == 0

    @pytest.mark.asyncio
    async def test_empty_result_is_cached(self, repo, db, fake_redis):
        db.execute.return_value = _rows([])

        assert await repo.list_events(EventsFilter(finished=True), 50, 0) == []
        assert await repo.list_events(EventsFilter(finished=True), 50, 0) == []

        assert db.execute.await_count == 1
        assert fake_redis.set_calls[0][0] == (
            'events:list:{"filter":{"finished":true},"limit":50,"offset":0}'
        )

    @pytest.mark.asyncio
    async def test_db_error_raises(self, repo, db):
        db.execute.side_effect = _db_error()

        with pytest.raises(DataFetchError, match="Failed to fetch events"):
            await repo.list_events(None, 50, 0)


class TestGetCurrentEventInfo:
    @pytest.mark.asyncio
    async def test_current_and_next_deadline(self, repo, db):
        next_mock = MagicMock()
        next_mock.fetchone.return_value = MagicMock(deadline_time="2025-10-18T10:00:00Z")
        db.execute.side_effect = [_rows([MagicMock(id=7)]), next_mock]

        info = await repo.get_current_event_info()

        assert info is not None
        assert info.current_event == 7
        assert info.next_utc_deadline == "2025-10-18T10:00:00Z"

    @pytest.mark.asyncio
    async def test_no_next_event(self, repo, db):
        next_mock = MagicMock()
        next_mock.fetchone.return_value = None
        db.execute.side_effect = [_rows([MagicMock(id=38)]), next_mock]

        info = await repo.get_current_event_info()

        assert info.current_event == 38
        assert info.next_utc_deadline is None

    @pytest.mark.asyncio
    async def test_next_deadline_failure_is_not_fatal(self, repo, db):
        db.execute.side_effect = [_rows([MagicMock(id=7)]), _db_error()]

        info = await repo.get_current_event_info()

        assert info.current_event == 7
        assert info.next_utc_deadline is None

    @pytest.mark.asyncio
    async def test_no_current_event_is_none_and_not_cached(self, repo, db, fake_redis):
        db.execute.return_value = _rows([])

        assert await repo.get_current_event_info() is None
        assert fake_redis.set_calls == []

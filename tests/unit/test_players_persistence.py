# tests/unit/test_players_persistence.py
"""Unit tests for PlayerRepository."""
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.fpl_common.errors import DataFetchError
from src.fpl_players.domain.models import Position, PlayersFilter, position_from_type
from src.fpl_players.infrastructure.persistence import PlayerRepository


def _make_player_row(**kwargs):
    row = MagicMock()
    row.id = kwargs.get("id", 302)
    row.code = kwargs.get("code", 223340)
    row.web_name = kwargs.get("web_name", "Saka")
    row.first_name = kwargs.get("first_name", "Bukayo")
    row.second_name = kwargs.get("second_name", "Saka")
    row.team_id = kwargs.get("team_id", 1)
    row.type = kwargs.get("type", 3)
    row.price = kwargs.get("price", 100)
    row.start_price = kwargs.get("start_price", 100)
    return row


def _make_team_row(**kwargs):
    row = MagicMock()
    row.id = kwargs.get("id", 1)
    row.code = 3
    row.name = kwargs.get("name", "Arsenal")
    row.short_name = kwargs.get("short_name", "ARS")
    row.strength = 5
    row.position = kwargs.get("position", 1)
    row.points = 20
    row.played = 8
    row.win = 6
    row.draw = 2
    row.loss = 0
    row.form = None
    row.strength_overall_home = 1350
    row.strength_overall_away = 1360
    row.strength_attack_home = 1340
    row.strength_attack_away = 1350
    row.strength_defence_home = 1360
    row.strength_defence_away = 1370
    return row


def _make_stats_row(**kwargs):
    row = MagicMock()
    row.element_id = kwargs.get("element_id", 302)
    row.event_id = kwargs.get("event_id", 7)
    row.transfers_in_event = kwargs.get("transfers_in_event", 150000)
    row.transfers_out_event = kwargs.get("transfers_out_event", 2000)
    return row


def _rows(rows):
    result_mock = MagicMock()
    result_mock.fetchall.return_value = rows
    return result_mock


@pytest.fixture
def repo(sessions, cache):
    return PlayerRepository(sessions, cache, ttl_seconds=300)


class TestPositionFromType:
    def test_known_types(self):
        assert position_from_type(1) is Position.GOALKEEPER
        assert position_from_type("4") is Position.FORWARD

    def test_unknown_type_is_midfielder(self):
        assert position_from_type(None) is Position.MIDFIELDER
        assert position_from_type("x") is Position.MIDFIELDER
        assert position_from_type(9) is Position.MIDFIELDER


class TestGetPlayer:
    @pytest.mark.asyncio
    async def test_returns_player(self, repo, db):
        db.execute.return_value = _rows([_make_player_row(type=2)])

        player = await repo.get_player_by_id(302)

        assert player.web_name == "Saka"
        assert player.position is Position.DEFENDER

    @pytest.mark.asyncio
    async def test_not_found(self, repo, db):
        db.execute.return_value = _rows([])
        assert await repo.get_player_by_id(1) is None

    @pytest.mark.asyncio
    async def test_db_error(self, repo, db):
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with pytest.raises(DataFetchError, match="Failed to fetch player"):
            await repo.get_player_by_id(1)


class TestListPlayers:
    @pytest.mark.asyncio
    async def test_filter_params(self, repo, db):
        db.execute.return_value = _rows([_make_player_row()])

        players = await repo.list_players(
            PlayersFilter(position=Position.FORWARD, team_id=3, max_price=80), 20, 40
        )

        assert len(players) == 1
        params = db.execute.call_args.args[1]
        assert params["position"] == 4
        assert params["team_id"] == 3
        assert params["min_price"] is None
        assert params["max_price"] == 80
        assert params["limit"] == 20
        assert params["offset"] == 40

    @pytest.mark.asyncio
    async def test_cache_key_uses_wire_names(self, repo, db, fake_redis):
        db.execute.return_value = _rows([])

        await repo.list_players(PlayersFilter(team_id=3), 50, 0)

        assert fake_redis.set_calls[0][0] == 'players:list:{"filter":{"teamId":3},"limit":50,"offset":0}'


class TestTeams:
    @pytest.mark.asyncio
    async def test_get_team(self, repo, db):
        db.execute.return_value = _rows([_make_team_row(id=1)])

        team = await repo.get_team_by_id(1)

        assert team.short_name == "ARS"

    @pytest.mark.asyncio
    async def test_list_teams_cached_under_fixed_key(self, repo, db, fake_redis):
        db.execute.return_value = _rows([_make_team_row(id=1, position=1), _make_team_row(id=2, position=2)])

        teams = await repo.list_teams()
        await repo.list_teams()

        assert [t.id for t in teams] == [1, 2]
        assert db.execute.await_count == 1
        assert fake_redis.set_calls[0][0] == "teams:list:all"


class TestTopTransfers:
    @pytest.mark.asyncio
    async def test_top_transfers_in(self, repo, db, fake_redis):
        db.execute.return_value = _rows([_make_stats_row(element_id=302), _make_stats_row(element_id=351)])

        stats = await repo.get_top_transfers_in(7, 5)

        assert [s.player_id for s in stats] == [302, 351]
        assert db.execute.call_args.args[1] == {"event_id": 7, "limit": 5}
        assert fake_redis.set_calls[0][0] == "players:top-transfers-in:7:5"

    @pytest.mark.asyncio
    async def test_limit_clamped_to_100(self, repo, db, fake_redis):
        db.execute.return_value = _rows([])

        await repo.get_top_transfers_out(7, 1000)

        assert db.execute.call_args.args[1]["limit"] == 100
        assert fake_redis.set_calls[0][0] == "players:top-transfers-out:7:100"

    @pytest.mark.asyncio
    async def test_null_counts_become_zero(self, repo, db):
        db.execute.return_value = _rows([_make_stats_row(transfers_out_event=None)])

        stats = await repo.get_top_transfers_in(7, 10)

        assert stats[0].transfers_out_event == 0

    @pytest.mark.asyncio
    async def test_db_error(self, repo, db):
        db.execute.side_effect = OSError("connection refused")
        with pytest.raises(DataFetchError, match="Failed to fetch top transfers out"):
            await repo.get_top_transfers_out(7, 10)

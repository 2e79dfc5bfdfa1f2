"""PlayerRepository — players, teams and per-event transfer stats.

Strict read-through: a database failure raises DataFetchError.
Top-transfer lists clamp their limit to [1, 100] (default 10) before the
limit is folded into the cache key.
"""

from pydantic import TypeAdapter
from sqlalchemy import TextClause, text

from src.fpl_cache.keys import clamp_limit, clamp_offset, identity_key, list_key, normalize_filter, scoped_key
from src.fpl_common.base_repository import CachedRepository
from src.fpl_players.domain.models import (
    Player,
    PlayersFilter,
    PlayerTransferStats,
    Team,
    position_from_type,
)

_TOP_TRANSFERS_DEFAULT = 10
_TOP_TRANSFERS_MAX = 100
_TEAMS_KEY = "teams:list:all"

_PLAYER_ADAPTER = TypeAdapter(Player)
_PLAYER_LIST_ADAPTER = TypeAdapter(list[Player])
_TEAM_ADAPTER = TypeAdapter(Team)
_TEAM_LIST_ADAPTER = TypeAdapter(list[Team])
_TRANSFER_LIST_ADAPTER = TypeAdapter(list[PlayerTransferStats])

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_PLAYER_COLUMNS = "id, code, web_name, first_name, second_name, team_id, type, price, start_price"

_TEAM_COLUMNS = """
    id, code, name, short_name, strength, position, points, played,
    win, draw, loss, form,
    strength_overall_home, strength_overall_away,
    strength_attack_home, strength_attack_away,
    strength_defence_home, strength_defence_away
"""

_GET_PLAYER_SQL = text(f"""
    SELECT {_PLAYER_COLUMNS}
    FROM players
    WHERE id = :player_id
    LIMIT 1
""")

_LIST_PLAYERS_SQL = text(f"""
    SELECT {_PLAYER_COLUMNS}
    FROM players
    WHERE
        (CAST(:position AS INTEGER) IS NULL OR type = CAST(:position AS INTEGER))
        AND (CAST(:team_id AS INTEGER) IS NULL OR team_id = CAST(:team_id AS INTEGER))
        AND (CAST(:min_price AS INTEGER) IS NULL OR price >= CAST(:min_price AS INTEGER))
        AND (CAST(:max_price AS INTEGER) IS NULL OR price <= CAST(:max_price AS INTEGER))
    ORDER BY id ASC
    LIMIT :limit OFFSET :offset
""")

_GET_TEAM_SQL = text(f"""
    SELECT {_TEAM_COLUMNS}
    FROM teams
    WHERE id = :team_id
    LIMIT 1
""")

_LIST_TEAMS_SQL = text(f"""
    SELECT {_TEAM_COLUMNS}
    FROM teams
    ORDER BY position ASC
""")

_TOP_TRANSFERS_IN_SQL = text("""
    SELECT element_id, event_id, transfers_in_event, transfers_out_event
    FROM player_stats
    WHERE event_id = :event_id AND transfers_in_event IS NOT NULL
    ORDER BY transfers_in_event DESC
    LIMIT :limit
""")

_TOP_TRANSFERS_OUT_SQL = text("""
    SELECT element_id, event_id, transfers_in_event, transfers_out_event
    FROM player_stats
    WHERE event_id = :event_id AND transfers_out_event IS NOT NULL
    ORDER BY transfers_out_event DESC
    LIMIT :limit
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def row_to_player(row: object) -> Player:
    return Player(
        id=row.id,  # type: ignore[attr-defined]
        code=row.code,  # type: ignore[attr-defined]
        web_name=row.web_name,  # type: ignore[attr-defined]
        first_name=row.first_name,  # type: ignore[attr-defined]
        second_name=row.second_name,  # type: ignore[attr-defined]
        team_id=row.team_id,  # type: ignore[attr-defined]
        position=position_from_type(row.type),  # type: ignore[attr-defined]
        price=row.price,  # type: ignore[attr-defined]
        start_price=row.start_price,  # type: ignore[attr-defined]
    )


def row_to_team(row: object) -> Team:
    return Team(
        id=row.id,  # type: ignore[attr-defined]
        code=row.code,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        short_name=row.short_name,  # type: ignore[attr-defined]
        strength=row.strength,  # type: ignore[attr-defined]
        position=row.position,  # type: ignore[attr-defined]
        points=row.points,  # type: ignore[attr-defined]
        played=row.played,  # type: ignore[attr-defined]
        win=row.win,  # type: ignore[attr-defined]
        draw=row.draw,  # type: ignore[attr-defined]
        loss=row.loss,  # type: ignore[attr-defined]
        form=row.form,  # type: ignore[attr-defined]
        strength_overall_home=row.strength_overall_home,  # type: ignore[attr-defined]
        strength_overall_away=row.strength_overall_away,  # type: ignore[attr-defined]
        strength_attack_home=row.strength_attack_home,  # type: ignore[attr-defined]
        strength_attack_away=row.strength_attack_away,  # type: ignore[attr-defined]
        strength_defence_home=row.strength_defence_home,  # type: ignore[attr-defined]
        strength_defence_away=row.strength_defence_away,  # type: ignore[attr-defined]
    )


def row_to_transfer_stats(row: object) -> PlayerTransferStats:
    return PlayerTransferStats(
        player_id=row.element_id,  # type: ignore[attr-defined]
        event_id=row.event_id,  # type: ignore[attr-defined]
        transfers_in_event=row.transfers_in_event or 0,  # type: ignore[attr-defined]
        transfers_out_event=row.transfers_out_event or 0,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class PlayerRepository(CachedRepository):
    async def get_player_by_id(self, player_id: int) -> Player | None:
        async def load() -> Player | None:
            row = await self._fetch_one(_GET_PLAYER_SQL, {"player_id": player_id}, "player")
            return row_to_player(row) if row else None

        return await self._cache.get_or_populate(
            identity_key("players", player_id), load, self._ttl, _PLAYER_ADAPTER
        )

    async def list_players(
        self,
        filter_: PlayersFilter | None,
        limit: int,
        offset: int,
    ) -> list[Player]:
        safe_limit = clamp_limit(limit)
        safe_offset = clamp_offset(offset)
        flt = filter_ or PlayersFilter()

        async def load() -> list[Player]:
            rows = await self._fetch_all(
                _LIST_PLAYERS_SQL,
                {
                    "position": int(flt.position) if flt.position is not None else None,
                    "team_id": flt.team_id,
                    "min_price": flt.min_price,
                    "max_price": flt.max_price,
                    "limit": safe_limit,
                    "offset": safe_offset,
                },
                "players",
            )
            return [row_to_player(row) for row in rows]

        key = list_key("players", normalize_filter(filter_), safe_limit, safe_offset)
        players = await self._cache.get_or_populate(key, load, self._ttl, _PLAYER_LIST_ADAPTER)
        return players or []

    async def get_team_by_id(self, team_id: int) -> Team | None:
        async def load() -> Team | None:
            row = await self._fetch_one(_GET_TEAM_SQL, {"team_id": team_id}, "team")
            return row_to_team(row) if row else None

        return await self._cache.get_or_populate(
            identity_key("teams", team_id), load, self._ttl, _TEAM_ADAPTER
        )

    async def list_teams(self) -> list[Team]:
        async def load() -> list[Team]:
            rows = await self._fetch_all(_LIST_TEAMS_SQL, {}, "teams")
            return [row_to_team(row) for row in rows]

        teams = await self._cache.get_or_populate(_TEAMS_KEY, load, self._ttl, _TEAM_LIST_ADAPTER)
        return teams or []

    async def get_top_transfers_in(self, event_id: int, limit: int) -> list[PlayerTransferStats]:
        return await self._top_transfers(
            "top-transfers-in", _TOP_TRANSFERS_IN_SQL, event_id, limit, "top transfers in"
        )

    async def get_top_transfers_out(self, event_id: int, limit: int) -> list[PlayerTransferStats]:
        return await self._top_transfers(
            "top-transfers-out", _TOP_TRANSFERS_OUT_SQL, event_id, limit, "top transfers out"
        )

    async def _top_transfers(
        self,
        operation: str,
        sql: TextClause,
        event_id: int,
        limit: int,
        what: str,
    ) -> list[PlayerTransferStats]:
        safe_limit = clamp_limit(limit, default=_TOP_TRANSFERS_DEFAULT, upper=_TOP_TRANSFERS_MAX)

        async def load() -> list[PlayerTransferStats]:
            rows = await self._fetch_all(sql, {"event_id": event_id, "limit": safe_limit}, what)
            return [row_to_transfer_stats(row) for row in rows]

        key = scoped_key("players", operation, event_id, safe_limit)
        stats = await self._cache.get_or_populate(key, load, self._ttl, _TRANSFER_LIST_ADAPTER)
        return stats or []

"""PlayerValueRepository — date-bucketed, best-effort.

Lookup order for ``get_player_values(change_date)``:

  1. ``PlayerValue:{YYYYMMDD}`` in whatever shape the producer wrote it
  2. no date given and today's bucket missing: the newest ``PlayerValue:*``
  3. player_values rows for that date (or the newest change_date)

Every failure ends in ``[]``; this read never raises and never writes the cache.
"""

import logging
from datetime import date, datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.fpl_cache.fallback import CacheReader, read_with_fallback
from src.fpl_cache.keys import date_token, dated_key
from src.fpl_common.base_repository import SqlRepository
from src.fpl_player_values.domain.models import PlayerValue, player_value_from_cache

logger = logging.getLogger(__name__)

KEY_PREFIX = "PlayerValue"

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_VALUE_COLUMNS = """
    player_id, player_name, team_id, team_name, position, price, value,
    last_value, points, selected_by, transfers_in, transfers_out,
    net_transfers, form, total_points, event_points, change_date
"""

# change_date is stored either as a date or as compact text, so match both renderings.
_VALUES_BY_DATE_SQL = text(f"""
    SELECT {_VALUE_COLUMNS}
    FROM player_values
    WHERE CAST(change_date AS TEXT) IN (:iso_date, :compact_date)
    ORDER BY player_id ASC
""")

_LATEST_VALUES_SQL = text(f"""
    SELECT {_VALUE_COLUMNS}
    FROM player_values
    WHERE change_date = (SELECT MAX(change_date) FROM player_values)
    ORDER BY player_id ASC
""")

# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def row_to_player_value(row: object) -> PlayerValue:
    return PlayerValue(
        player_id=row.player_id,  # type: ignore[attr-defined]
        player_name=row.player_name or "",  # type: ignore[attr-defined]
        team_id=row.team_id or 0,  # type: ignore[attr-defined]
        team_name=row.team_name or "",  # type: ignore[attr-defined]
        position=row.position or "",  # type: ignore[attr-defined]
        price=row.price or 0,  # type: ignore[attr-defined]
        value=float(row.value or 0),  # type: ignore[attr-defined]
        last_value=float(row.last_value or 0),  # type: ignore[attr-defined]
        points=row.points or 0,  # type: ignore[attr-defined]
        selected_by=float(row.selected_by or 0),  # type: ignore[attr-defined]
        transfers_in=row.transfers_in or 0,  # type: ignore[attr-defined]
        transfers_out=row.transfers_out or 0,  # type: ignore[attr-defined]
        net_transfers=row.net_transfers or 0,  # type: ignore[attr-defined]
        form=float(row.form) if row.form is not None else None,  # type: ignore[attr-defined]
        total_points=row.total_points or 0,  # type: ignore[attr-defined]
        event_points=row.event_points,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class PlayerValueRepository(SqlRepository):
    def __init__(self, sessions: async_sessionmaker[AsyncSession], reader: CacheReader) -> None:
        super().__init__(sessions)
        self._reader = reader

    async def get_player_values(self, change_date: date | datetime | None) -> list[PlayerValue]:
        key = dated_key(KEY_PREFIX, change_date)

        async def load() -> list[PlayerValue]:
            return await self._load_from_database(change_date)

        return await read_with_fallback(
            self._reader,
            key,
            player_value_from_cache,
            load,
            label="player values",
            latest_prefix=f"{KEY_PREFIX}:" if change_date is None else None,
        )

    async def _load_from_database(self, change_date: date | datetime | None) -> list[PlayerValue]:
        if change_date is None:
            rows = await self._fetch_all(_LATEST_VALUES_SQL, {}, "player values")
        else:
            compact = date_token(change_date)
            iso = f"{compact[:4]}-{compact[4:6]}-{compact[6:]}"
            rows = await self._fetch_all(
                _VALUES_BY_DATE_SQL,
                {"iso_date": iso, "compact_date": compact},
                "player values",
            )

        if not rows:
            logger.warning("No player values in database: change_date=%s", change_date)
            return []

        values = [row_to_player_value(row) for row in rows]
        logger.info(
            "Loaded player values from database: change_date=%s data_date=%s count=%d",
            change_date,
            rows[0].change_date,
            len(values),
        )
        return values

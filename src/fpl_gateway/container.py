"""Service wiring — built once in the app lifespan, stored on app.state.

Every repository shares one CacheStore over the shared Redis client and
one session factory. Live data uses the short TTL.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from config.settings import Settings
from src.fpl_cache.accessor import ReadThroughCache
from src.fpl_cache.fallback import CacheReader
from src.fpl_cache.store import CacheClientProtocol, CacheStore
from src.fpl_entries.application.service import EntryApplicationService
from src.fpl_entries.infrastructure.persistence import EntryRepository
from src.fpl_event_results.application.service import EventResultApplicationService
from src.fpl_event_results.infrastructure.persistence import EventResultRepository
from src.fpl_events.application.service import EventApplicationService
from src.fpl_events.infrastructure.persistence import EventRepository
from src.fpl_fixtures.application.service import FixtureApplicationService
from src.fpl_fixtures.infrastructure.persistence import FixtureRepository
from src.fpl_gateway.auth.service import DeviceAuthService
from src.fpl_leagues.application.service import LeagueApplicationService
from src.fpl_leagues.infrastructure.persistence import LeagueRepository
from src.fpl_live.application.service import LiveApplicationService
from src.fpl_live.infrastructure.persistence import LiveRepository
from src.fpl_player_values.application.service import PlayerValueApplicationService
from src.fpl_player_values.infrastructure.persistence import PlayerValueRepository
from src.fpl_players.application.service import PlayerApplicationService
from src.fpl_players.infrastructure.persistence import PlayerRepository


@dataclass
class Services:
    events: EventApplicationService
    players: PlayerApplicationService
    fixtures: FixtureApplicationService
    leagues: LeagueApplicationService
    entries: EntryApplicationService
    live: LiveApplicationService
    player_values: PlayerValueApplicationService
    event_results: EventResultApplicationService
    device_auth: DeviceAuthService


def build_services(
    sessions: async_sessionmaker[AsyncSession],
    cache_client: CacheClientProtocol,
    settings: Settings,
) -> Services:
    store = CacheStore(cache_client)
    cache = ReadThroughCache(store, single_flight=settings.CACHE_SINGLE_FLIGHT)
    reader = CacheReader(store)
    ttl = settings.CACHE_TTL_SECONDS

    return Services(
        events=EventApplicationService(EventRepository(sessions, cache, ttl)),
        players=PlayerApplicationService(PlayerRepository(sessions, cache, ttl)),
        fixtures=FixtureApplicationService(FixtureRepository(sessions, cache, ttl)),
        leagues=LeagueApplicationService(LeagueRepository(sessions, cache, ttl)),
        entries=EntryApplicationService(EntryRepository(sessions, cache, ttl)),
        live=LiveApplicationService(
            LiveRepository(sessions, cache, settings.LIVE_CACHE_TTL_SECONDS)
        ),
        player_values=PlayerValueApplicationService(PlayerValueRepository(sessions, reader)),
        event_results=EventResultApplicationService(
            EventResultRepository(sessions, reader, settings.CURRENT_SEASON)
        ),
        device_auth=DeviceAuthService(sessions, settings.DEVICE_TOKEN_TTL_DAYS),
    )

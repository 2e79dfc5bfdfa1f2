"""Root GraphQL schema: every domain's query mixin merged into one Query."""

import strawberry
from strawberry.tools import merge_types

from src.fpl_entries.api.schema import EntryQuery
from src.fpl_event_results.api.schema import EventResultQuery
from src.fpl_events.api.schema import EventQuery
from src.fpl_fixtures.api.schema import FixtureQuery
from src.fpl_gateway.graphql.auth_schema import AuthMutation, AuthQuery
from src.fpl_leagues.api.schema import LeagueQuery
from src.fpl_live.api.schema import LiveQuery
from src.fpl_player_values.api.schema import PlayerValueQuery
from src.fpl_players.api.schema import PlayerQuery

Query = merge_types(
    "Query",
    (
        EventQuery,
        PlayerQuery,
        FixtureQuery,
        LeagueQuery,
        EntryQuery,
        LiveQuery,
        PlayerValueQuery,
        EventResultQuery,
        AuthQuery,
    ),
)

Mutation = merge_types("Mutation", (AuthMutation,))

schema = strawberry.Schema(query=Query, mutation=Mutation)

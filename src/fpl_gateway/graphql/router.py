"""Strawberry GraphQL router mounted at /graphql."""

from fastapi import Depends
from strawberry.fastapi import GraphQLRouter

from config.settings import settings
from src.fpl_gateway.auth.dependencies import get_optional_user, get_services
from src.fpl_gateway.auth.models import AuthUser
from src.fpl_gateway.container import Services
from src.fpl_gateway.graphql.context import GraphQLContext
from src.fpl_gateway.graphql.schema import schema


async def get_context(
    services: Services = Depends(get_services),
    user: AuthUser | None = Depends(get_optional_user),
) -> GraphQLContext:
    return GraphQLContext(services=services, user=user)


graphql_router = GraphQLRouter(
    schema,
    context_getter=get_context,
    graphql_ide="graphiql" if settings.DEBUG else None,
)

"""Per-request GraphQL context.

The bearer token is resolved once per request (see ``get_context``); every
resolver reads the same ``user`` and the process-wide ``services``.
"""

from typing import TYPE_CHECKING

import strawberry
from strawberry.fastapi import BaseContext

from src.fpl_common.errors import AuthenticationRequiredError

if TYPE_CHECKING:
    from src.fpl_gateway.auth.models import AuthUser
    from src.fpl_gateway.container import Services


class GraphQLContext(BaseContext):
    def __init__(self, services: "Services", user: "AuthUser | None" = None) -> None:
        super().__init__()
        self.services = services
        self.user = user


def get_services(info: strawberry.Info) -> "Services":
    return info.context.services


def require_user(info: strawberry.Info) -> "AuthUser":
    user = info.context.user
    if user is None:
        raise AuthenticationRequiredError()
    return user

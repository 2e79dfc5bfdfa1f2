"""FastAPI dependencies: resolve the optional device bearer token.

Usage:
    user: AuthUser | None = Depends(get_optional_user)

A missing, malformed, unknown or expired token yields None; protected
GraphQL fields raise AuthenticationRequiredError themselves.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.fpl_gateway.auth.models import AuthUser
from src.fpl_gateway.container import Services

_bearer = HTTPBearer(auto_error=False)


def get_services(request: Request) -> Services:
    return request.app.state.services


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    services: Services = Depends(get_services),
) -> AuthUser | None:
    if credentials is None or not credentials.credentials.strip():
        return None
    return await services.device_auth.validate_device_token(credentials.credentials.strip())

"""GraphQL surface for the authenticated caller.

  me                        — null when the request carries no valid token
  myDevices                 — requires auth
  revokeDevice(deviceId)    — requires auth; only the caller's own devices
"""

import strawberry

from src.fpl_common.datetime_utils import to_iso
from src.fpl_gateway.auth.models import AuthUser, DeviceSession
from src.fpl_gateway.graphql.context import get_services, require_user


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    email: str | None
    name: str | None
    email_verified: bool
    image: str | None
    is_anonymous: bool

    @classmethod
    def from_domain(cls, user: AuthUser) -> "UserType":
        return cls(
            id=strawberry.ID(user.id),
            email=user.email,
            name=user.name,
            email_verified=user.email_verified,
            image=user.image,
            is_anonymous=user.is_anonymous,
        )


@strawberry.type(name="DeviceSession")
class DeviceSessionType:
    id: strawberry.ID
    device_id: str
    device_name: str | None
    device_os: str | None
    last_active: str | None
    created_at: str | None

    @classmethod
    def from_domain(cls, device: DeviceSession) -> "DeviceSessionType":
        return cls(
            id=strawberry.ID(device.id),
            device_id=device.device_id,
            device_name=device.device_name,
            device_os=device.device_os,
            last_active=to_iso(device.last_active),
            created_at=to_iso(device.created_at),
        )


@strawberry.type
class AuthQuery:
    @strawberry.field
    def me(self, info: strawberry.Info) -> UserType | None:
        user = info.context.user
        return UserType.from_domain(user) if user else None

    @strawberry.field
    async def my_devices(self, info: strawberry.Info) -> list[DeviceSessionType]:
        user = require_user(info)
        devices = await get_services(info).device_auth.get_user_devices(user.id)
        return [DeviceSessionType.from_domain(d) for d in devices]


@strawberry.type
class AuthMutation:
    @strawberry.mutation
    async def revoke_device(self, info: strawberry.Info, device_id: str) -> bool:
        user = require_user(info)
        return await get_services(info).device_auth.revoke_device(user.id, device_id)

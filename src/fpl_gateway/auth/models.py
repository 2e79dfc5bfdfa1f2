"""Device-auth records."""

from datetime import datetime

from pydantic import BaseModel


class AuthUser(BaseModel):
    """The caller behind a valid device token."""

    id: str
    email: str | None = None
    name: str | None = None
    email_verified: bool = False
    image: str | None = None
    is_anonymous: bool = False
    device_id: str | None = None


class DeviceSession(BaseModel):
    id: str
    device_id: str
    device_name: str | None = None
    device_os: str | None = None
    last_active: datetime | None = None
    created_at: datetime | None = None


class DeviceAuthResult(BaseModel):
    token: str
    user_id: str
    is_anonymous: bool

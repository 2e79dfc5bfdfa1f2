"""Pydantic request/response schemas for the device-auth endpoint.

Field names are snake_case on the wire to match the mobile clients.
"""

from pydantic import BaseModel, Field


class DeviceAuthRequest(BaseModel):
    device_id: str | None = Field(None, max_length=255)
    device_name: str | None = Field(None, max_length=255)
    device_os: str | None = Field(None, max_length=64)


class DeviceAuthResponse(BaseModel):
    token: str
    user_id: str
    is_anonymous: bool

"""Device authentication: anonymous users keyed by a device id.

Tables (owned by the auth schema, not by the feed):
    "user"            — id, "deviceId", "isAnonymous", email, name, ...
    device_sessions   — one row per device; device_id UNIQUE; opaque token

A device authenticating again keeps its user and gets a fresh token; the
previous token stops validating because the session row is overwritten.
"""

import logging
import uuid
from datetime import timedelta

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.fpl_common.base_repository import DB_ERRORS
from src.fpl_common.datetime_utils import utc_now
from src.fpl_common.errors import DeviceLinkError, DeviceNotFoundError, InvalidDeviceRequestError
from src.fpl_gateway.auth.models import AuthUser, DeviceAuthResult, DeviceSession

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_FIND_DEVICE_USER_SQL = text("""
    SELECT id, "isAnonymous" AS is_anonymous
    FROM "user"
    WHERE "deviceId" = :device_id
""")

_INSERT_ANONYMOUS_USER_SQL = text("""
    INSERT INTO "user" (id, "deviceId", "isAnonymous", "createdAt", "updatedAt")
    VALUES (:user_id, :device_id, TRUE, NOW(), NOW())
""")

_UPSERT_SESSION_SQL = text("""
    INSERT INTO device_sessions
        (id, user_id, device_id, device_name, device_os, token, expires_at, created_at)
    VALUES
        (:id, :user_id, :device_id, :device_name, :device_os, :token, :expires_at, NOW())
    ON CONFLICT (device_id) DO UPDATE SET
        token = EXCLUDED.token,
        last_active = NOW(),
        expires_at = EXCLUDED.expires_at,
        device_name = COALESCE(EXCLUDED.device_name, device_sessions.device_name),
        device_os = COALESCE(EXCLUDED.device_os, device_sessions.device_os)
""")

_VALIDATE_TOKEN_SQL = text("""
    SELECT ds.user_id, ds.device_id, u.email, u.name,
           u."emailVerified" AS email_verified, u.image, u."isAnonymous" AS is_anonymous
    FROM device_sessions ds
    JOIN "user" u ON ds.user_id = u.id
    WHERE ds.token = :token AND ds.expires_at > NOW()
""")

_TOUCH_SESSION_SQL = text("""
    UPDATE device_sessions SET last_active = NOW() WHERE token = :token
""")

_USER_DEVICES_SQL = text("""
    SELECT id, device_id, device_name, device_os, last_active, created_at
    FROM device_sessions
    WHERE user_id = :user_id AND expires_at > NOW()
    ORDER BY last_active DESC NULLS LAST
""")

_DELETE_USER_DEVICE_SQL = text("""
    DELETE FROM device_sessions
    WHERE user_id = :user_id AND device_id = :device_id
""")

_FIND_ANONYMOUS_DEVICE_USER_SQL = text("""
    SELECT id FROM "user"
    WHERE "deviceId" = :device_id AND "isAnonymous" = TRUE
    FOR UPDATE
""")

_LINK_USER_SQL = text("""
    UPDATE "user"
    SET email = :email, "isAnonymous" = FALSE, "linkedAt" = NOW(), "updatedAt" = NOW()
    WHERE id = :user_id
""")


def _new_id() -> str:
    return str(uuid.uuid4())


class DeviceAuthService:
    """Owns its sessions: each call is one short transaction."""

    def __init__(self, sessions: async_sessionmaker[AsyncSession], token_ttl_days: int = 365) -> None:
        self._sessions = sessions
        self._token_ttl = timedelta(days=token_ttl_days)

    async def authenticate_device(
        self,
        device_id: str,
        device_name: str | None = None,
        device_os: str | None = None,
    ) -> DeviceAuthResult:
        """Find-or-create the device's user and issue a new token atomically."""
        if not device_id or not device_id.strip():
            raise InvalidDeviceRequestError("device_id is required and must be a string")

        token = _new_id()
        async with self._sessions() as db, db.begin():
            result = await db.execute(_FIND_DEVICE_USER_SQL, {"device_id": device_id})
            row = result.fetchone()
            if row is not None:
                user_id = str(row.id)
                is_anonymous = bool(row.is_anonymous)
            else:
                user_id = _new_id()
                is_anonymous = True
                await db.execute(
                    _INSERT_ANONYMOUS_USER_SQL, {"user_id": user_id, "device_id": device_id}
                )

            await db.execute(
                _UPSERT_SESSION_SQL,
                {
                    "id": _new_id(),
                    "user_id": user_id,
                    "device_id": device_id,
                    "device_name": device_name,
                    "device_os": device_os,
                    "token": token,
                    "expires_at": utc_now() + self._token_ttl,
                },
            )

        logger.info(
            "Device authenticated: device_id=%s user_id=%s new_user=%s",
            device_id,
            user_id,
            row is None,
        )
        return DeviceAuthResult(token=token, user_id=user_id, is_anonymous=is_anonymous)

    async def validate_device_token(self, token: str) -> AuthUser | None:
        """Resolve an unexpired token to its user and record activity."""
        if not token:
            return None
        async with self._sessions() as db:
            result = await db.execute(_VALIDATE_TOKEN_SQL, {"token": token})
            row = result.fetchone()
            if row is None:
                return None

            # Activity tracking must not fail an otherwise valid request.
            try:
                await db.execute(_TOUCH_SESSION_SQL, {"token": token})
                await db.commit()
            except DB_ERRORS as exc:
                logger.warning("Failed to update device last_active: err=%s", exc)

        return AuthUser(
            id=str(row.user_id),
            email=row.email,
            name=row.name,
            email_verified=bool(row.email_verified),
            image=row.image,
            is_anonymous=bool(row.is_anonymous),
            device_id=row.device_id,
        )

    async def get_user_devices(self, user_id: str) -> list[DeviceSession]:
        async with self._sessions() as db:
            result = await db.execute(_USER_DEVICES_SQL, {"user_id": user_id})
            rows = result.fetchall()
        return [
            DeviceSession(
                id=str(row.id),
                device_id=row.device_id,
                device_name=row.device_name,
                device_os=row.device_os,
                last_active=row.last_active,
                created_at=row.created_at,
            )
            for row in rows
        ]

    async def revoke_device(self, user_id: str, device_id: str) -> bool:
        """Delete the user's session for ``device_id``; a device the user does not own is not found."""
        async with self._sessions() as db, db.begin():
            result = await db.execute(
                _DELETE_USER_DEVICE_SQL, {"user_id": user_id, "device_id": device_id}
            )
            if result.rowcount == 0:
                raise DeviceNotFoundError(device_id)
        logger.info("Device revoked: user_id=%s device_id=%s", user_id, device_id)
        return True

    async def link_device_to_account(self, device_id: str, email: str) -> None:
        """Attach an email to the device's anonymous user; fails if already linked."""
        async with self._sessions() as db, db.begin():
            result = await db.execute(_FIND_ANONYMOUS_DEVICE_USER_SQL, {"device_id": device_id})
            row = result.fetchone()
            if row is None:
                raise DeviceLinkError(device_id)
            await db.execute(_LINK_USER_SQL, {"email": email, "user_id": row.id})
        logger.info("Device linked to account: device_id=%s", device_id)

"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/Device
  2xxx: Data fetch (strict read paths)
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/Device ---

class AuthenticationRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Authentication required", 401)


class DeviceNotFoundError(AppError):
    def __init__(self, device_id: str) -> None:
        super().__init__(1002, f"Device not found or not owned by user: {device_id}", 404)


class InvalidDeviceRequestError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(1003, detail, 400)


class DeviceLinkError(AppError):
    def __init__(self, device_id: str) -> None:
        super().__init__(1004, f"Device user not found or already linked: {device_id}", 409)


# --- 2xxx: Data fetch ---

class DataFetchError(AppError):
    """Relational read failed on a strict path.

    The message is deliberately generic ("Failed to fetch players"); the
    underlying cause is chained and logged by the repository.
    """

    def __init__(self, what: str) -> None:
        super().__init__(2001, f"Failed to fetch {what}", 502)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)

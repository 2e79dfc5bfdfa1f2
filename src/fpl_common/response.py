"""REST envelope for the non-GraphQL endpoints (device auth).

    {"code": 0, "message": "success", "data": {...},
     "timestamp": "2025-10-03T17:30:00+00:00", "request_id": "req_a1b2c3d4e5f6"}

``code`` is 0 on success and the AppError code otherwise; ``data`` is null
on error. GraphQL keeps its own ``{"data", "errors"}`` shape.
"""

import uuid
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from src.fpl_common.datetime_utils import utc_now

T = TypeVar("T")


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


class ApiResponse(BaseModel, Generic[T]):
    code: int = 0
    message: str = "success"
    data: T | None = None
    timestamp: str = Field(default_factory=lambda: utc_now().isoformat())
    request_id: str = Field(default_factory=new_request_id)


def success_response(data: T, request_id: str | None = None) -> ApiResponse[T]:
    if request_id is None:
        return ApiResponse[T](data=data)
    return ApiResponse[T](data=data, request_id=request_id)


def error_response(code: int, message: str, request_id: str | None = None) -> ApiResponse[None]:
    if request_id is None:
        return ApiResponse[None](code=code, message=message)
    return ApiResponse[None](code=code, message=message, request_id=request_id)

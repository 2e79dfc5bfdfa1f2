"""Request logging middleware.

Every request gets a request id, reused from an upstream ``X-Request-ID``
header when a proxy already assigned one. The id is stored on
request.state (echoed by the REST envelope) and returned as a header.

    INFO    [POST] /graphql → 200 (23ms) req_a1b2c3d4e5f6
    WARNING [POST] /api/device/auth → 400 (4ms) req_...
    ERROR   [POST] /graphql → 500 (9ms) req_...
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.fpl_common.response import new_request_id

logger = logging.getLogger("fpl.request")

_HEADER = "X-Request-ID"
_MAX_INCOMING_ID = 64


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        incoming = request.headers.get(_HEADER, "").strip()
        request_id = incoming[:_MAX_INCOMING_ID] if incoming else new_request_id()
        request.state.request_id = request_id

        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        response.headers[_HEADER] = request_id
        logger.log(
            _level_for(response.status_code),
            "[%s] %s → %d (%.0fms) %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id,
        )
        return response

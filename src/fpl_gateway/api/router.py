"""Device auth REST endpoint.

POST /api/device/auth   — find-or-create anonymous user, issue token

Returns ApiResponse[DeviceAuthResponse]. request_id is read from
request.state (injected by RequestLogMiddleware).
"""

from fastapi import APIRouter, Depends, Request, status

from src.fpl_common.errors import InvalidDeviceRequestError
from src.fpl_common.response import ApiResponse, success_response
from src.fpl_gateway.api.schemas import DeviceAuthRequest, DeviceAuthResponse
from src.fpl_gateway.auth.dependencies import get_services
from src.fpl_gateway.container import Services

router = APIRouter(prefix="/device", tags=["device-auth"])


def _get_request_id(request: Request) -> str:
    """Read request_id injected by RequestLogMiddleware, fallback if absent."""
    return getattr(request.state, "request_id", "req_unknown")


@router.post(
    "/auth",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[DeviceAuthResponse],
    summary="Device authentication",
)
async def authenticate_device(
    request: Request,
    body: DeviceAuthRequest,
    services: Services = Depends(get_services),
) -> ApiResponse[DeviceAuthResponse]:
    if not body.device_id or not body.device_id.strip():
        raise InvalidDeviceRequestError("device_id is required and must be a string")

    result = await services.device_auth.authenticate_device(
        body.device_id, body.device_name, body.device_os
    )

    data = DeviceAuthResponse(
        token=result.token,
        user_id=result.user_id,
        is_anonymous=result.is_anonymous,
    )
    return success_response(data, _get_request_id(request))

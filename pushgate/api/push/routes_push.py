"""Push API routes: single, multi-token and bulk sends."""
from fastapi import APIRouter, Depends

from pushgate.api.deps import get_push_service
from pushgate.domain.push.schemas import (
    MulticastNotificationRequest,
    NotificationRequest,
    SendResponse,
)
from pushgate.services.push_service import PushService

router = APIRouter()

SEND_OK = "Send message successfully!"
SEND_PARTIAL = "Send message have error!"


@router.post("", response_model=SendResponse)
async def send_notification(
    request: NotificationRequest,
    push_service: PushService = Depends(get_push_service),
):
    """Send one notification to one token. Vendor failure is answered with 500 and the vendor error."""
    response = await push_service.send_one(request)
    return SendResponse(message=SEND_OK, response=response)


@router.put("", response_model=SendResponse)
async def send_notification_multiple_devices(
    request: MulticastNotificationRequest,
    push_service: PushService = Depends(get_push_service),
):
    """Send one notification to every token in the list. Per-token message id or error string."""
    responses = await push_service.send_multicast(request)
    return SendResponse(message=SEND_OK, response=responses)


@router.post("/bulk", response_model=SendResponse)
async def send_notification_bulk(
    requests: list[NotificationRequest],
    push_service: PushService = Depends(get_push_service),
):
    """Send a list of independent notifications concurrently.

    Always 200 once sending started; ``message`` tells whether any item failed.
    """
    result = await push_service.send_bulk(requests)
    return SendResponse(message=SEND_PARTIAL if result.failed else SEND_OK, response=result.responses)

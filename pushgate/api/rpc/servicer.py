"""gRPC PushGatewayService.

Domain outcomes (missing token, bad priority, vendor failure) are reported in the
response ``message`` field with an OK status, never as gRPC errors.
"""
import logging

import grpc

from pushgate.domain.common.errors import SendError, ValidationError
from pushgate.domain.push.schemas import AndroidConfig, NotificationRequest
from pushgate.services.push_service import PushService

logger = logging.getLogger(__name__)

# Generated at import time from the shipped .proto (needs grpcio-tools)
protos, services = grpc.protos_and_services("pushgate/protos/push.proto")

ANDROID_PRIORITIES = ("high", "normal")

TOKEN_REQUIRED = "Token is required!"
PRIORITY_WRONG = "priority is wrong"
SEND_ERROR = "Send message error"
SEND_OK = "Send message success!"


def request_from_proto(request) -> NotificationRequest:
    """Map SendSingleTokenRequest onto the HTTP request schema. Unset optionals stay empty."""
    android = None
    if request.HasField("android"):
        android = AndroidConfig(
            collapse_key=request.android.collapse_key,
            data=dict(request.android.data),
            restricted_package_name=request.android.restricted_package_name,
            priority=request.android.priority,
        )
    return NotificationRequest(
        token=request.token,
        title=request.title if request.HasField("title") else "",
        body=request.body if request.HasField("body") else "",
        image_url=request.image_url if request.HasField("image_url") else "",
        data=dict(request.data) or None,
        android=android,
    )


class PushGatewayServicer(services.PushGatewayServiceServicer):
    def __init__(self, push_service: PushService):
        self._push_service = push_service

    async def SendSingleToken(self, request, context: grpc.aio.ServicerContext):
        if not request.token:
            logger.info("Token is required")
            return protos.SendSingleTokenResponse(message=TOKEN_REQUIRED)
        if request.HasField("android") and request.android.priority not in ANDROID_PRIORITIES:
            return protos.SendSingleTokenResponse(message=PRIORITY_WRONG)

        try:
            response = await self._push_service.send_one(request_from_proto(request))
        except SendError as e:
            return protos.SendSingleTokenResponse(message=SEND_ERROR, response=e.detail)
        except ValidationError as e:
            return protos.SendSingleTokenResponse(message=e.message)
        return protos.SendSingleTokenResponse(message=SEND_OK, response=response)


def create_server(push_service: PushService, address: str) -> tuple[grpc.aio.Server, int]:
    """Build (but do not start) an aio server bound to ``address``. Returns the server and bound port."""
    server = grpc.aio.server()
    services.add_PushGatewayServiceServicer_to_server(PushGatewayServicer(push_service), server)
    port = server.add_insecure_port(address)
    logger.info("gRPC server bound to %s (port %d)", address, port)
    return server, port

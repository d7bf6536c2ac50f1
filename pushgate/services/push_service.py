"""
Push delivery: validate, build, and send through the vendor client.

Single sends raise on failure. Multicast and bulk sends fan out one task per
message, join on all of them, and report every item's outcome; one failed item
never aborts the batch.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional

from firebase_admin import messaging
from firebase_admin.exceptions import FirebaseError

from pushgate.domain.common.errors import SendError, ValidationError
from pushgate.domain.push.message_builder import build_message
from pushgate.domain.push.schemas import MulticastNotificationRequest, NotificationRequest
from pushgate.infra.push.firebase import Sender

logger = logging.getLogger(__name__)

TOKEN_REQUIRED = "token is required!"


def _short(token: Optional[str]) -> str:
    if not token:
        return "<none>"
    return f"{token[:20]}..." if len(token) > 20 else token


@dataclass
class SendOutcome:
    """Result of one vendor call inside a fan-out."""
    token: Optional[str]
    message_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BulkResult:
    outcomes: list[SendOutcome] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)

    @property
    def responses(self) -> list[str]:
        """Message id per success, ``"<error> with token <token>"`` per failure."""
        return [
            o.message_id if o.ok else f"{o.error} with token {o.token}"
            for o in self.outcomes
        ]


class PushService:
    """Send FCM messages through an injected sender (``messaging.send`` bound to an app)."""

    def __init__(self, sender: Sender, max_concurrency: int = 0):
        self._sender = sender
        self._max_concurrency = max_concurrency

    async def _send(self, message: messaging.Message) -> str:
        """Run the blocking vendor call off the event loop. Vendor errors become SendError."""
        try:
            return await asyncio.to_thread(self._sender, message)
        except (FirebaseError, ValueError) as e:
            # ValueError: the SDK rejected the message before sending (e.g. token and topic both set)
            raise SendError(str(e), token=message.token) from e

    async def send_one(self, request: NotificationRequest) -> str:
        """Send a single message and return the FCM message id."""
        if not request.token:
            raise ValidationError(TOKEN_REQUIRED)
        message = build_message(request)
        try:
            response = await self._send(message)
        except SendError as e:
            logger.error("Send message error for token %s: %s", _short(request.token), e.detail)
            raise
        logger.info("FCM response: %s", response)
        return response

    async def _fan_out(self, messages: list[messaging.Message]) -> list[SendOutcome]:
        semaphore = asyncio.Semaphore(self._max_concurrency) if self._max_concurrency > 0 else None

        async def one(message: messaging.Message) -> SendOutcome:
            try:
                if semaphore is None:
                    message_id = await self._send(message)
                else:
                    async with semaphore:
                        message_id = await self._send(message)
            except SendError as e:
                return SendOutcome(token=message.token, error=e.detail)
            return SendOutcome(token=message.token, message_id=message_id)

        return list(await asyncio.gather(*(one(m) for m in messages)))

    async def send_multicast(self, request: MulticastNotificationRequest) -> list[str]:
        """Send the same notification to every token. One string per token, in input order."""
        if not request.token:
            raise ValidationError(TOKEN_REQUIRED)
        messages = [build_message(request, token=token) for token in request.token]
        outcomes = await self._fan_out(messages)
        failed = [o for o in outcomes if not o.ok]
        if failed:
            logger.warning("Multicast: %d of %d messages failed", len(failed), len(outcomes))
        return [o.message_id if o.ok else o.error for o in outcomes]

    async def send_bulk(self, requests: list[NotificationRequest]) -> BulkResult:
        """Send heterogeneous messages concurrently.

        Every item is validated and built before the first vendor call, so a missing
        token rejects the whole batch without sending anything.
        """
        messages = []
        for request in requests:
            if not request.token:
                raise ValidationError(TOKEN_REQUIRED)
            messages.append(build_message(request))
        result = BulkResult(outcomes=await self._fan_out(messages))
        if result.failed:
            logger.warning(
                "Some messages failed (%d of %d): %s",
                result.failed,
                len(result.outcomes),
                [o.error for o in result.outcomes if not o.ok],
            )
        return result

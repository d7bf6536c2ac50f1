"""Pytest configuration: fake FCM sender and an HTTP client over the ASGI app."""
import threading
from typing import Optional

import pytest
from firebase_admin import messaging
from httpx import ASGITransport, AsyncClient

from pushgate.services.push_service import PushService


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests that need a real Firebase project"
    )


class FakeSender:
    """Stands in for messaging.send. Records every message; fails for tokens in ``fail_tokens``."""

    def __init__(self, fail_tokens: Optional[dict[str, Exception]] = None):
        self.fail_tokens = fail_tokens or {}
        self.messages: list[messaging.Message] = []
        self._lock = threading.Lock()

    def __call__(self, message: messaging.Message) -> str:
        with self._lock:
            self.messages.append(message)
            n = len(self.messages)
        error = self.fail_tokens.get(message.token)
        if error is not None:
            raise error
        return f"projects/test-project/messages/{message.token}-{n}"

    @property
    def tokens(self) -> list[str]:
        return [m.token for m in self.messages]


@pytest.fixture
def sender() -> FakeSender:
    return FakeSender()


@pytest.fixture
def unregistered_error() -> messaging.UnregisteredError:
    return messaging.UnregisteredError("Requested entity was not found.")


@pytest.fixture
def push_service(sender) -> PushService:
    return PushService(sender)


@pytest.fixture
async def client(push_service):
    """HTTP client for the gateway with the fake sender injected on app.state."""
    from pushgate.main import app

    app.state.push_service = push_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.state.push_service = None

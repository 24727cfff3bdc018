"""
Shared pytest fixtures for the order service tests.

These fixtures provide fresh collaborators for every test, so no test sees
another test's orders, sent mails, or HTTP mocks.
"""

import pytest
import respx

from shared.config import Settings
from shared.exceptions import DependencyUnavailable, UserNotFound
from shared.mailer import Mailer, NotificationResult
from shared.models import NotificationEvent, User
from shared.order_store import InMemoryOrderStore


USER_SERVICE_URL = "http://localhost"
MAIL_SERVICE_URL = "https://mailer.com"
ADMIN_EMAIL = "admin@example.com"


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings pointing at the mocked services, with mail enabled."""
    return Settings(
        user_service_url=USER_SERVICE_URL,
        mail_service_url=MAIL_SERVICE_URL,
        admin_email=ADMIN_EMAIL,
        send_mails=True,
        http_timeout=1.0,
    )


@pytest.fixture
def store() -> InMemoryOrderStore:
    """Fresh, empty order store for each test."""
    return InMemoryOrderStore()


# =============================================================================
# HTTP Mocks
# =============================================================================

@pytest.fixture
def mock_services():
    """
    Intercept all outbound HTTP.

    Any request without a matching route fails the test, so nothing can
    reach a real service. User 1 (John) exists by default.
    """
    with respx.mock(assert_all_mocked=True, assert_all_called=False) as router:
        router.get(f"{USER_SERVICE_URL}/user/1", name="john").respond(200, json={"id": 1, "name": "John"})
        yield router


@pytest.fixture
def mail_route(mock_services):
    """Mail service route that accepts every message."""
    return mock_services.post(f"{MAIL_SERVICE_URL}/send").respond(202)


# =============================================================================
# In-Process Fakes
# =============================================================================

class FakeUserDirectory:
    """User directory backed by a dict. Records every lookup."""

    def __init__(self, users=None, error=None):
        self.users = users if users is not None else {1: User(id=1, name="John")}
        self.error = error
        self.calls: list[int] = []

    def get_user(self, user_id: int) -> User:
        self.calls.append(user_id)
        if self.error is not None:
            raise self.error
        if user_id not in self.users:
            raise UserNotFound(user_id, message="User does not exist", code="nonExisting")
        return self.users[user_id]


class RecordingNotifier:
    """Notifier that records events instead of sending them."""

    def __init__(self, fail_with=None, success=True):
        self.events: list[NotificationEvent] = []
        self.fail_with = fail_with
        self.success = success

    def __call__(self, event: NotificationEvent) -> NotificationResult:
        self.events.append(event)
        if self.fail_with is not None:
            raise self.fail_with
        return NotificationResult(
            success=self.success,
            recipient=event.recipient,
            subject=event.subject,
            error=None if self.success else "rejected",
        )


@pytest.fixture
def user_directory() -> FakeUserDirectory:
    """Directory where only user 1 exists."""
    return FakeUserDirectory()


@pytest.fixture
def unavailable_directory() -> FakeUserDirectory:
    """Directory whose every lookup fails at the transport level."""
    return FakeUserDirectory(error=DependencyUnavailable("connection refused"))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def raising_notifier() -> RecordingNotifier:
    """Notifier that blows up on every call."""
    return RecordingNotifier(fail_with=RuntimeError("SMTP relay down"))


@pytest.fixture
def rejecting_notifier() -> RecordingNotifier:
    """Notifier whose deliveries are reported as failed."""
    return RecordingNotifier(success=False)


@pytest.fixture
def mailer(mock_services) -> Mailer:
    """Mailer pointed at the mocked mail service."""
    mailer = Mailer(MAIL_SERVICE_URL, timeout=1.0)
    yield mailer
    mailer.close()


# =============================================================================
# Order Fixtures
# =============================================================================

@pytest.fixture
def valid_order() -> dict:
    """An order for an existing user."""
    return {"userId": 1, "productId": 2, "mode": "approved"}


@pytest.fixture
def unknown_user_order() -> dict:
    """An order for user 7, who does not exist."""
    return {"userId": 7, "productId": 2, "mode": "draft"}

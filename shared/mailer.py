"""
Email channel for administrative notifications.

Sends each NotificationEvent to the mail service with one POST to
<base_url>/send. Delivery is best-effort:
- At most one attempt per event, no retries, no batching
- Delivery failures are returned as a failed NotificationResult, never raised
- The most recent attempts are kept for inspection in tests and demos
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import httpx

from shared.models import NotificationEvent

logger = logging.getLogger("mailer")

# Delivery attempts kept in memory; older ones are dropped
DEFAULT_HISTORY_SIZE = 100


@dataclass
class NotificationResult:
    """
    Result of a single delivery attempt.
    """
    success: bool
    recipient: str
    subject: str
    status_code: Optional[int] = None
    timestamp: datetime = field(default_factory=datetime.utcnow)
    error: Optional[str] = None

    def __str__(self) -> str:
        status = "✓" if self.success else "✗"
        return f"{status} EMAIL to {self.recipient}: {self.subject}"


class Mailer:
    """
    HTTP client for the mail service.

    Example usage:
        mailer = Mailer("https://mailer.com")
        result = mailer.send(NotificationEvent(
            subject="Order created",
            body="Order #1 was created",
            recipient="admin@example.com",
        ))
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: Optional[httpx.Client] = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client
        self._lock = threading.Lock()
        self.sent_messages: deque[NotificationResult] = deque(maxlen=history_size)

    @property
    def client(self) -> httpx.Client:
        """HTTP client, created on first use."""
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(timeout=self.timeout)
            return self._client

    def send(self, event: NotificationEvent) -> NotificationResult:
        """
        Deliver an event to the mail service.

        Args:
            event: Subject, body and recipient of the email

        Returns:
            NotificationResult indicating success/failure
        """
        payload = {
            "subject": event.subject,
            "body": event.body,
            "recipientAddress": event.recipient,
        }
        try:
            response = self.client.post(f"{self.base_url}/send", json=payload, timeout=self.timeout)
        except httpx.HTTPError as e:
            result = NotificationResult(
                success=False,
                recipient=event.recipient,
                subject=event.subject,
                error=f"Mail service unreachable: {e}",
            )
            logger.error(f"[EMAIL FAILED] To: {event.recipient} | Subject: {event.subject} | Error: {result.error}")
        else:
            if response.is_success:
                result = NotificationResult(
                    success=True,
                    recipient=event.recipient,
                    subject=event.subject,
                    status_code=response.status_code,
                )
                logger.info(f"[EMAIL] To: {event.recipient} | Subject: {event.subject}")
                logger.debug(f"[EMAIL BODY] {event.body}")
            else:
                result = NotificationResult(
                    success=False,
                    recipient=event.recipient,
                    subject=event.subject,
                    status_code=response.status_code,
                    error=f"Mail service answered {response.status_code}",
                )
                logger.error(f"[EMAIL FAILED] To: {event.recipient} | Subject: {event.subject} | Error: {result.error}")

        with self._lock:
            self.sent_messages.append(result)
        return result

    def get_sent_count(self) -> int:
        """Get the number of recorded delivery attempts (for testing)."""
        return len(self.sent_messages)

    def get_successful_sends(self) -> list[NotificationResult]:
        """Get all successful sends."""
        return [m for m in self.sent_messages if m.success]

    def clear_history(self):
        """Clear sent message history (useful between tests)."""
        with self._lock:
            self.sent_messages.clear()

    def close(self) -> None:
        """Release the HTTP client if this mailer created it."""
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

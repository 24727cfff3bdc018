"""
Notification message templates.

Templates for the administrative emails sent after a create-order call.
Templates support variable substitution using Python's string formatting.

Design decisions:
- Templates are stored as simple strings with {variable} placeholders
- One template per outcome (order created, order failed)
- Rendering returns a validated NotificationEvent, so an empty subject or a
  malformed recipient is caught before anything is sent
"""

from dataclasses import dataclass
from enum import Enum

from shared.models import NotificationEvent


class NotificationType(str, Enum):
    """
    Supported notification types.

    Each type corresponds to an outcome of the order workflow.
    """
    ORDER_CREATED = "order_created"
    ORDER_FAILED = "order_failed"


@dataclass
class NotificationTemplate:
    """An email template with subject and body."""
    notification_type: NotificationType
    subject: str
    body: str

    def render(self, **kwargs) -> tuple[str, str]:
        """
        Render the template with provided variables.

        Returns:
            Tuple of (subject, body)
        """
        return (
            self.subject.format(**kwargs),
            self.body.format(**kwargs),
        )


# =============================================================================
# Template Definitions
# =============================================================================

TEMPLATES: dict[NotificationType, NotificationTemplate] = {

    NotificationType.ORDER_CREATED: NotificationTemplate(
        notification_type=NotificationType.ORDER_CREATED,
        subject="New order #{order_id}",
        body="""A new order was created.

Order: #{order_id}
User: {user_id}
Product: {product_id}
Mode: {mode}
""",
    ),

    NotificationType.ORDER_FAILED: NotificationTemplate(
        notification_type=NotificationType.ORDER_FAILED,
        subject="Order failed for user {user_id}",
        body="""An order could not be created.

User: {user_id}
Product: {product_id}
Mode: {mode}

Reason ({error_code}): {reason}
""",
    ),
}


# =============================================================================
# Template Access Functions
# =============================================================================

def get_template(notification_type: NotificationType) -> NotificationTemplate:
    """
    Get a template by notification type.

    Raises:
        ValueError: If no template exists for the type
    """
    template = TEMPLATES.get(notification_type)
    if not template:
        raise ValueError(f"No template found for notification type: {notification_type}")
    return template


def build_event(
    notification_type: NotificationType,
    recipient: str,
    **context,
) -> NotificationEvent:
    """
    Render a template into a NotificationEvent.

    Args:
        notification_type: The type of notification
        recipient: Email address of the administrator
        **context: Variables to substitute in the template

    Returns:
        The rendered, validated event
    """
    subject, body = get_template(notification_type).render(**context)
    return NotificationEvent(subject=subject, body=body, recipient=recipient)

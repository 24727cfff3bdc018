"""
Shared infrastructure for the order service.

This package contains the workflow's collaborators:
- Domain models (Order, OrderInput, User, NotificationEvent)
- Order store (in-memory, lock-protected)
- User directory client for the external user service
- Mailer for administrator notifications, and its templates
- Configuration and the error taxonomy
"""

from shared.models import (
    Order,
    OrderInput,
    OrderMode,
    User,
    NotificationEvent,
)
from shared.config import Settings
from shared.order_store import InMemoryOrderStore, OrderStore
from shared.user_directory import HttpUserDirectory, UserDirectory
from shared.mailer import Mailer, NotificationResult

__all__ = [
    "Order",
    "OrderInput",
    "OrderMode",
    "User",
    "NotificationEvent",
    "Settings",
    "InMemoryOrderStore",
    "OrderStore",
    "HttpUserDirectory",
    "UserDirectory",
    "Mailer",
    "NotificationResult",
]

"""
Order creation workflow.

This is the only part of the service with decision logic:

    Received -> Validated -> UserResolved -> Persisted -> (notified | skipped)

with failure edges out of every step. Validation failures are returned
before any external call. Every other failure sends one failure email to the
administrator before the error is raised.

Notifications are a side channel: the workflow calls `notify` with a
NotificationEvent and discards the result. A notifier that fails or raises
never changes the outcome reported to the caller.
"""

import logging
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings
from shared.exceptions import (
    DependencyError,
    DependencyUnavailable,
    InternalError,
    NotFoundError,
    OrderServiceError,
    ReferenceNotFoundError,
    UserNotFound,
    ValidationError,
)
from shared.models import NotificationEvent, Order, OrderInput
from shared.order_store import OrderStore
from shared.templates import NotificationType, build_event
from shared.user_directory import UserDirectory

logger = logging.getLogger("ordering")

# Takes an outcome event; whatever it returns is ignored
SideEffect = Callable[[NotificationEvent], Any]


class OrderWorkflow:
    """
    Orchestrates validation, user lookup, persistence and notification.

    The workflow holds no per-request state. Its collaborators are injected
    so tests can swap any of them:

        workflow = OrderWorkflow(
            store=InMemoryOrderStore(),
            user_directory=HttpUserDirectory("http://localhost"),
            notify=Mailer("https://mailer.com").send,
            settings=Settings(send_mails=True),
        )
        order = workflow.create_order({"userId": 1, "productId": 2, "mode": "approved"})
    """

    def __init__(
        self,
        store: OrderStore,
        user_directory: UserDirectory,
        notify: SideEffect,
        settings: Optional[Settings] = None,
    ):
        self.store = store
        self.user_directory = user_directory
        self.notify = notify
        self.settings = settings or Settings()

    def create_order(self, raw: Union[Mapping[str, Any], OrderInput]) -> Order:
        """
        Validate, resolve the user, persist, and notify.

        Args:
            raw: Order fields as received (userId, productId, optional mode)

        Returns:
            The stored order with its assigned id

        Raises:
            ValidationError: Input is malformed (no downstream calls made)
            ReferenceNotFoundError: The user does not exist
            DependencyError: The user service failed
            InternalError: Persisting the order failed
        """
        order_input = self._validate(raw)

        try:
            self._resolve_user(order_input.user_id)
            order = self._persist(order_input)
        except OrderServiceError as e:
            logger.warning(f"Order rejected for user {order_input.user_id}: {e.code} - {e.message}")
            self._send_failure_notification(order_input, e)
            raise

        logger.info(f"Order {order.id} created for user {order.user_id}")

        if self.settings.send_mails:
            self._send_success_notification(order)
        else:
            logger.debug(f"Mail disabled, skipping notification for order {order.id}")

        return order

    def get_order(self, order_id: Union[int, str]) -> Order:
        """
        Get an order by id.

        Raises:
            NotFoundError: No order has that id (including non-integer ids)
        """
        try:
            key = int(order_id)
        except (TypeError, ValueError):
            raise NotFoundError(f"Order not found: {order_id}")

        order = self.store.find_by_id(key)
        if order is None:
            raise NotFoundError(f"Order not found: {order_id}")
        return order

    # =========================================================================
    # Workflow Steps
    # =========================================================================

    def _validate(self, raw: Union[Mapping[str, Any], OrderInput]) -> OrderInput:
        if isinstance(raw, OrderInput):
            return raw
        if not isinstance(raw, Mapping):
            raise ValidationError("Order must be a JSON object")
        try:
            return OrderInput.model_validate(raw)
        except PydanticValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            logger.info(f"Invalid order rejected: {problems}")
            raise ValidationError(f"Invalid order: {problems}") from e

    def _resolve_user(self, user_id: int) -> None:
        try:
            self.user_directory.get_user(user_id)
        except UserNotFound as e:
            raise ReferenceNotFoundError(str(e)) from e
        except DependencyUnavailable as e:
            raise DependencyError(f"User service unavailable: {e}") from e
        except Exception as e:
            raise DependencyError(f"Unexpected error looking up user {user_id}: {e}") from e

    def _persist(self, order_input: OrderInput) -> Order:
        try:
            return self.store.insert(order_input)
        except Exception as e:
            logger.error(f"Failed to persist order for user {order_input.user_id}: {e}")
            raise InternalError("Failed to save the order") from e

    # =========================================================================
    # Notifications
    # =========================================================================

    def _send_success_notification(self, order: Order) -> None:
        self._fire(
            NotificationType.ORDER_CREATED,
            order_id=order.id,
            user_id=order.user_id,
            product_id=order.product_id,
            mode=order.mode,
        )

    def _send_failure_notification(self, order_input: OrderInput, error: OrderServiceError) -> None:
        self._fire(
            NotificationType.ORDER_FAILED,
            user_id=order_input.user_id,
            product_id=order_input.product_id,
            mode=order_input.mode,
            error_code=error.code,
            reason=error.message,
        )

    def _fire(self, notification_type: NotificationType, **context) -> None:
        """Build and send a notification. Never raises."""
        try:
            event = build_event(notification_type, self.settings.admin_email, **context)
            result = self.notify(event)
        except Exception as e:
            logger.error(f"Failed to send {notification_type.value} notification: {e}")
            return

        if getattr(result, "success", True) is False:
            logger.warning(
                f"{notification_type.value} notification not delivered: {getattr(result, 'error', None)}"
            )

"""
In-memory order store.

This module provides the persistence layer for orders. The workflow only
depends on the OrderStore protocol, so a database-backed store can replace
the in-memory one without touching the workflow.

Design decisions:
- Ids come from a monotonic counter, never from the caller
- Id assignment and the write happen under one lock, so concurrent inserts
  never reuse an id (FastAPI runs sync endpoints in a threadpool)
- No update or delete - orders are immutable once stored
"""

import itertools
import logging
import threading
from typing import Optional, Protocol

from shared.models import Order, OrderInput

logger = logging.getLogger("order_store")


class OrderStore(Protocol):
    """Capability the order workflow needs from persistence."""

    def insert(self, order_input: OrderInput) -> Order:
        ...

    def find_by_id(self, order_id: int) -> Optional[Order]:
        ...


class InMemoryOrderStore:
    """
    Order table held in process memory.

    Created when the application is built and cleared at shutdown. Tests
    create a fresh instance per test so they never share orders.

    Example usage:
        store = InMemoryOrderStore()
        order = store.insert(OrderInput(userId=1, productId=2))
        assert store.find_by_id(order.id) == order
    """

    def __init__(self):
        self._orders: dict[int, Order] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    # =========================================================================
    # Order Operations
    # =========================================================================

    def insert(self, order_input: OrderInput) -> Order:
        """
        Assign a new id and store the order.

        Returns:
            The stored order, including its id
        """
        with self._lock:
            order = Order(
                id=next(self._ids),
                user_id=order_input.user_id,
                product_id=order_input.product_id,
                mode=order_input.mode,
            )
            self._orders[order.id] = order
        logger.debug(f"Stored order {order.id}")
        return order

    def find_by_id(self, order_id: int) -> Optional[Order]:
        """Get an order by id, or None if it was never issued."""
        with self._lock:
            return self._orders.get(order_id)

    def list_orders(self) -> list[Order]:
        """Get all orders in insertion order."""
        with self._lock:
            return list(self._orders.values())

    def count(self) -> int:
        with self._lock:
            return len(self._orders)

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def clear(self) -> None:
        """
        Drop every stored order.

        The id counter is not reset, so ids stay unique for the lifetime of
        the store.
        """
        with self._lock:
            dropped = len(self._orders)
            self._orders.clear()
        logger.info(f"Cleared order store ({dropped} orders)")

from __future__ import annotations

import random
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, List, Optional

from stores import seed
from stores.models import (
    CartLine,
    Order,
    OrderStatus,
    PaymentMethod,
    ShippingAddress,
)
from utils.logger import get_logger

_logger = get_logger(__name__)

DELIVERY_DAYS = 5


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def expected_delivery(order: Order) -> datetime:
    """Date the order is promised by, DELIVERY_DAYS after it was placed."""
    return order.date + timedelta(days=DELIVERY_DAYS)


class OrderStore:
    """
    Append-only collection of orders, in insertion order.

    Orders embed their own copy of the cart lines, so they never change when the
    catalog does.
    """

    def __init__(
        self,
        orders: Optional[Iterable[Order]] = None,
        now: Callable[[], datetime] = _utcnow,
    ):
        self._orders: List[Order] = list(
            seed.seed_orders() if orders is None else orders
        )
        self._now = now

    def __len__(self) -> int:
        return len(self._orders)

    def list(self) -> List[Order]:
        return list(self._orders)

    def get_order_by_id(self, order_id: str) -> Optional[Order]:
        return next((o for o in self._orders if o.id == order_id), None)

    def get_user_orders(self, user_id: str) -> List[Order]:
        return [o for o in self._orders if o.user_id == user_id]

    def _generate_order_id(self) -> str:
        """Short "ord-NNN" id not already in use; falls back to a longer one."""
        taken = {o.id for o in self._orders}
        for _ in range(1000):
            cand = f"ord-{random.randint(0, 999):03d}"
            if cand not in taken:
                return cand
        while True:
            cand = f"ord-{uuid.uuid4().hex[:8]}"
            if cand not in taken:
                return cand

    def create_order(
        self,
        user_id: str,
        lines: Iterable[CartLine],
        shipping_address: ShippingAddress,
        payment_method: PaymentMethod,
    ) -> Order:
        """
        Record a new pending order for the given lines.

        total_amount is the sum of unit price x quantity. An empty line list is
        accepted and gives a zero total.
        """
        items = tuple(lines)
        order = Order(
            id=self._generate_order_id(),
            user_id=user_id,
            items=items,
            total_amount=sum((line.line_total for line in items), 0.0),
            status=OrderStatus.PENDING,
            date=self._now(),
            shipping_address=shipping_address,
            payment_method=payment_method,
        )
        self._orders.append(order)
        _logger.info(
            f"Order {order.id} created for user {user_id}: "
            f"{order.item_count} item(s), ${order.total_amount:.2f}"
        )
        return order

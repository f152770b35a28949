from __future__ import annotations

from typing import Any, Dict

from stores.catalog import CatalogStore
from stores.models import OrderStatus
from stores.orders import OrderStore
from stores.session import SessionStore


def dashboard_summary(
    catalog: CatalogStore, orders: OrderStore, sessions: SessionStore
) -> Dict[str, Any]:
    """
    Headline numbers for the admin dashboard.
    Revenue counts every order regardless of status.
    """
    all_orders = orders.list()
    by_status = {status.value: 0 for status in OrderStatus}
    for order in all_orders:
        by_status[order.status.value] += 1
    return {
        "total_products": len(catalog),
        "total_orders": len(all_orders),
        "total_revenue": sum((o.total_amount for o in all_orders), 0.0),
        "total_users": sessions.account_count,
        "orders_by_status": by_status,
    }

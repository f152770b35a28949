import unittest

from helpers import RecordingSleep

from stores.catalog import CatalogStore
from stores.cart import CartStore
from stores.checkout import checkout
from stores.orders import OrderStore
from stores.reports import dashboard_summary
from stores.session import SessionStore


class DashboardSummaryTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.catalog = CatalogStore()
        self.orders = OrderStore()
        self.session = SessionStore(sleep=RecordingSleep())

    def test_seeded_numbers(self):
        summary = dashboard_summary(self.catalog, self.orders, self.session)
        self.assertEqual(summary["total_products"], 12)
        self.assertEqual(summary["total_orders"], 3)
        self.assertEqual(summary["total_users"], 2)
        self.assertAlmostEqual(
            summary["total_revenue"],
            sum(o.total_amount for o in self.orders.list()),
        )
        self.assertEqual(
            set(summary["orders_by_status"]),
            {"pending", "processing", "shipped", "delivered", "cancelled"},
        )
        self.assertEqual(sum(summary["orders_by_status"].values()), 3)

    async def test_new_order_and_signup_show_up(self):
        before = dashboard_summary(self.catalog, self.orders, self.session)

        await self.session.signup("Jane", "jane@new.com", "pw")
        cart = CartStore()
        await cart.add_to_cart(self.catalog.get_by_id("2"), 3)
        order = await checkout(self.session, cart, self.orders)

        after = dashboard_summary(self.catalog, self.orders, self.session)
        self.assertEqual(after["total_users"], before["total_users"] + 1)
        self.assertEqual(after["total_orders"], before["total_orders"] + 1)
        self.assertAlmostEqual(
            after["total_revenue"], before["total_revenue"] + order.total_amount
        )
        self.assertEqual(
            after["orders_by_status"]["pending"],
            before["orders_by_status"]["pending"] + 1,
        )

    def test_empty_history(self):
        summary = dashboard_summary(
            self.catalog, OrderStore(orders=[]), self.session
        )
        self.assertEqual(summary["total_orders"], 0)
        self.assertEqual(summary["total_revenue"], 0.0)
        self.assertTrue(all(v == 0 for v in summary["orders_by_status"].values()))

from typing import Optional

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import ScreenResume
from textual.widgets import Button, DataTable, MarkdownViewer

from stores.models import Order
from stores.orders import expected_delivery
from utils.messages import ModeSwitchedMessage, NewOrderMessage
from utils.pure import markdown_table, money, plural
from views.base_screen import BaseScreen


def render_order(order: Optional[Order]) -> str:
    """Markdown body for the order detail pane."""
    if order is None:
        return "### Select an order to view its details."

    addr = order.shipping_address
    header = (
        f"### Order {order.id}\n"
        f"Placed: {order.date:%Y-%m-%d %H:%M}  \n"
        f"Status: **{order.status.value.title()}**  \n"
        f"Expected Delivery: {expected_delivery(order):%Y-%m-%d}  \n"
        f"Ship To: {addr.name}, {addr.street}, {addr.city}, {addr.state} "
        f"{addr.zip_code}, {addr.country}  \n"
        f"Payment: {order.payment_method.describe()}\n\n"
    )
    table = markdown_table(
        ["Product", "Category", "Qty", "Unit Price", "Line Total"],
        [
            [
                line.product.name,
                line.product.category,
                line.quantity,
                money(line.product.price),
                money(line.line_total),
            ]
            for line in order.items
        ],
        ["l", "l", "r", "r", "r"],
    )
    return header + table + f"\n\n**Total:** {money(order.total_amount)}"


class OrdersScreen(BaseScreen):
    """
    The logged-in user's orders, oldest first, with a detail pane.
    """

    def __init__(self) -> None:
        super().__init__()

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Vertical():
            yield MarkdownViewer(id="md-order-detail", show_table_of_contents=False)
            yield DataTable(id="table-orders")
        with Horizontal(id="hort-table-control"):
            yield Button("Refresh", id="btn-refresh")

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("Order", "Date", "Status", "Items", "Total")
        self.handle_refresh()

    @on(Button.Pressed, "#btn-refresh")
    @on(ModeSwitchedMessage)
    @on(ScreenResume)
    @on(NewOrderMessage)
    def handle_refresh(self) -> None:
        state = self.app.state
        user = state.session.user
        orders = state.orders.get_user_orders(user.id) if user else []

        table = self.query_one(DataTable)
        table.clear()
        for o in orders:
            table.add_row(
                o.id,
                f"{o.date:%Y-%m-%d}",
                o.status.value.title(),
                plural(o.item_count, "item"),
                money(o.total_amount),
                key=o.id,
            )
        self._render_detail(orders[0] if orders else None)

    @on(DataTable.RowHighlighted, "#table-orders")
    def handle_row_highlight(self, event: DataTable.RowHighlighted) -> None:
        order = self.app.state.orders.get_order_by_id(event.row_key.value)
        self._render_detail(order)

    def _render_detail(self, order: Optional[Order]) -> None:
        viewer = self.query_one("#md-order-detail", MarkdownViewer)
        viewer.document.update(render_order(order))

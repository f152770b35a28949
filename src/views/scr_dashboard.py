from textual import on, work
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.events import ScreenResume
from textual.widgets import DataTable, Input, MarkdownViewer, TabbedContent, TabPane

from stores.reports import dashboard_summary
from utils.messages import ModeSwitchedMessage, NewOrderMessage
from utils.pure import markdown_table, money
from views.base_screen import BaseScreen


class DashboardScreen(BaseScreen):
    """
    Admin overview: headline numbers, every order, product search.
    """

    def __init__(self) -> None:
        super().__init__()

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Vertical():
            yield MarkdownViewer(id="md-summary", show_table_of_contents=False)
            with TabbedContent():
                with TabPane("Orders", id="tab-orders"):
                    yield DataTable(id="table-all-orders")
                with TabPane("Products", id="tab-products"):
                    yield Input(placeholder="Search products...", id="input-search")
                    yield DataTable(id="table-products")

    def on_mount(self) -> None:
        orders_table = self.query_one("#table-all-orders", DataTable)
        orders_table.cursor_type = "row"
        orders_table.zebra_stripes = True
        orders_table.add_columns("Order", "Customer", "Date", "Status", "Total")

        products_table = self.query_one("#table-products", DataTable)
        products_table.cursor_type = "row"
        products_table.zebra_stripes = True
        products_table.add_columns("ID", "Name", "Category", "Price")

        self.handle_reload()
        self.filter_products("")

    @on(NewOrderMessage)
    @on(ScreenResume)
    @on(ModeSwitchedMessage)
    @work(exclusive=True)
    async def handle_reload(self) -> None:
        state = self.app.state
        if not state.session.is_admin:
            await self.query_one("#md-summary", MarkdownViewer).document.update(
                "### Access denied\n\n"
                "You don't have permission to access the admin dashboard."
            )
            return

        summary = dashboard_summary(state.catalog, state.orders, state.session)
        md = "### Dashboard\n\n" + markdown_table(
            ["Total Products", "Total Orders", "Total Revenue", "Total Users"],
            [
                [
                    summary["total_products"],
                    summary["total_orders"],
                    money(summary["total_revenue"]),
                    summary["total_users"],
                ]
            ],
            ["c", "c", "c", "c"],
        )
        md += "\n\n#### Orders by status\n\n" + markdown_table(
            ["Status", "Orders"],
            [[k.title(), v] for k, v in summary["orders_by_status"].items()],
            ["l", "r"],
        )
        await self.query_one("#md-summary", MarkdownViewer).document.update(md)

        table = self.query_one("#table-all-orders", DataTable)
        table.clear()
        for o in state.orders.list():
            table.add_row(
                o.id,
                o.shipping_address.name,
                f"{o.date:%Y-%m-%d}",
                o.status.value.title(),
                money(o.total_amount),
                key=o.id,
            )

    @on(Input.Changed, "#input-search")
    def handle_search(self, event: Input.Changed) -> None:
        self.filter_products(event.value)

    def filter_products(self, query: str) -> None:
        table = self.query_one("#table-products", DataTable)
        table.clear()
        if not self.app.state.session.is_admin:
            return
        for p in self.app.state.catalog.search(query, include_category=True):
            table.add_row(p.id, p.name, p.category, money(p.price), key=p.id)

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, DataTable, Input, Label, Select

from stores.catalog import SORT_KEYS
from utils.messages import CartChangedMessage
from utils.pure import money, plural
from views.base_screen import BaseScreen
from views.modal_prod_detail import ProdDetailModal

SORT_LABELS = {
    "featured": "Featured",
    "price-low-high": "Price: Low to High",
    "price-high-low": "Price: High to Low",
    "newest": "Newest",
}


def _parse_price(raw: str):
    try:
        return float(raw) if raw.strip() else None
    except ValueError:
        return None


class CatalogScreen(BaseScreen):
    """
    Product listing with search, category, price range and sort.
    """

    CSS = """
    #input-min-price, #input-max-price {
        width: 14;
    }
    """

    def __init__(self):
        super().__init__()

    def compose(self) -> ComposeResult:
        yield from super().compose()
        yield Input(id="input-search", placeholder="Search products...")
        with Horizontal(id="hort-filters"):
            yield Select(
                [],
                prompt="All categories",
                allow_blank=True,
                id="select-category",
            )
            yield Select(
                [(SORT_LABELS[k], k) for k in SORT_KEYS],
                value="featured",
                allow_blank=False,
                id="select-sort",
            )
            yield Input(placeholder="Min $", id="input-min-price", type="number")
            yield Input(placeholder="Max $", id="input-max-price", type="number")
            yield Button("Clear Filters", id="btn-clear-filters")
        yield Label("", id="label-result-cnt")
        yield DataTable(id="table-products")

    def on_mount(self):
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("ID", "Name", "Category", "Price")

        categories = sorted(self.app.state.catalog.categories())
        self.query_one("#select-category", Select).set_options(
            [(c.title(), c) for c in categories]
        )

        self.refresh_results()
        self.query_one("#input-search").focus()

    @on(Input.Changed)
    @on(Select.Changed)
    def handle_filter_change(self) -> None:
        self.refresh_results()

    @on(Button.Pressed, "#btn-clear-filters")
    def handle_clear_filters(self) -> None:
        self.query_one("#input-search", Input).value = ""
        self.query_one("#input-min-price", Input).value = ""
        self.query_one("#input-max-price", Input).value = ""
        self.query_one("#select-category", Select).clear()
        self.query_one("#select-sort", Select).value = "featured"
        self.refresh_results()

    def refresh_results(self) -> None:
        table = self.query_one(DataTable)
        if not table.columns:
            return
        category = self.query_one("#select-category", Select).value
        sort = self.query_one("#select-sort", Select).value
        products = self.app.state.catalog.filter_products(
            query=self.query_one("#input-search", Input).value,
            categories=[category] if isinstance(category, str) else [],
            min_price=_parse_price(self.query_one("#input-min-price", Input).value),
            max_price=_parse_price(self.query_one("#input-max-price", Input).value),
            sort=sort if isinstance(sort, str) else "featured",
        )

        table.clear()
        for p in products:
            table.add_row(p.id, p.name, p.category, money(p.price), key=p.id)
        self.query_one("#label-result-cnt", Label).update(
            plural(len(products), "Product")
        )

    @on(DataTable.RowSelected, "#table-products")
    @work()
    async def handle_product_selected(self, event: DataTable.RowSelected) -> None:
        if await self.app.push_screen_wait(ProdDetailModal(event.row_key.value)):
            self.app.post_message(CartChangedMessage())

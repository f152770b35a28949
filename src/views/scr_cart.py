from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.events import ScreenResume
from textual.widgets import Button, DataTable, Input, Label, Markdown, Rule

from stores.errors import StoreError
from stores.pricing import summarize
from utils.messages import CartChangedMessage, ModeSwitchedMessage, NewOrderMessage
from utils.pure import markdown_table, money, plural
from views.base_screen import BaseScreen
from views.modal_checkout import CheckoutModal
from views.modal_dialog import DialogModal


class CartScreen(BaseScreen):
    """
    Cart lines, quantity edits, promo code, summary and checkout.
    """

    CSS = """
    #input-promo {
        width: 24;
    }
    """

    def __init__(self) -> None:
        super().__init__()

    def compose(self) -> ComposeResult:
        yield from super().compose()
        yield Label("Your Shopping Cart", id="label-cart-title")
        yield DataTable(id="table-cart")
        with Horizontal(id="hort-line-actions"):
            yield Button("-", id="btn-qty-down")
            yield Button("+", id="btn-qty-up")
            yield Button("Remove", id="btn-remove", variant="warning")
        yield Rule(line_style="dashed")
        with Horizontal(id="hort-promo"):
            yield Input(placeholder="Promo code", id="input-promo")
            yield Button("Apply", id="btn-apply-promo")
        yield Markdown("", id="md-summary")
        with Horizontal(id="hort-buttons"):
            yield Button("Clear Cart", id="btn-clear-cart")
            yield Button("Checkout", id="btn-checkout", variant="primary")

    def on_mount(self):
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("Product", "Price", "Qty", "Total")
        self.handle_cart_change()

    def _selected_product_id(self):
        table = self.query_one(DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return row_key.value

    @on(CartChangedMessage)
    @on(ModeSwitchedMessage)
    @on(ScreenResume)
    @work(exclusive=True)
    async def handle_cart_change(self):
        """
        Redraw lines and summary from the cart store.
        """
        state = self.app.state
        cart = state.cart
        table = self.query_one(DataTable)
        cursor_row = table.cursor_row
        table.clear()
        for line in cart.lines:
            table.add_row(
                line.product.name,
                money(line.product.price),
                line.quantity,
                money(line.line_total),
                key=line.product.id,
            )
        if cart.lines:
            table.move_cursor(row=min(cursor_row, len(cart.lines) - 1))

        title = "Your Shopping Cart"
        if cart.total_items:
            title += f" ({plural(cart.total_items, 'item')})"
        self.query_one("#label-cart-title", Label).update(title)

        if cart.is_empty:
            state.discount = None
        summary = summarize(cart.total_price, state.discount or 0.0)
        rows = [
            ["Subtotal", money(summary.subtotal)],
            ["Shipping", "Free" if not summary.shipping else money(summary.shipping)],
            ["Tax (8%)", money(summary.tax)],
        ]
        if summary.discount:
            rows.append(["Discount", money(-summary.discount)])
        rows.append(["**Total**", f"**{money(summary.total)}**"])
        await self.query_one("#md-summary", Markdown).update(
            markdown_table(["Order Summary", ""], rows, ["l", "r"])
        )

    @on(Button.Pressed, "#btn-qty-up")
    @on(Button.Pressed, "#btn-qty-down")
    async def handle_quantity(self, event: Button.Pressed) -> None:
        product_id = self._selected_product_id()
        if product_id is None:
            return
        line = self.app.state.cart.get_line(product_id)
        step = 1 if event.button.id == "btn-qty-up" else -1
        # the minus button stops at 1; removing goes through the Remove button
        if line.quantity + step < 1:
            return
        await self.app.state.cart.update_quantity(product_id, line.quantity + step)
        self.post_message(CartChangedMessage())

    @on(Button.Pressed, "#btn-remove")
    @work()
    async def handle_remove_item(self):
        product_id = self._selected_product_id()
        if product_id is None:
            return
        remove_confirmed = await self.app.push_screen_wait(
            DialogModal(
                "Do you really want to remove this item from cart?",
                primary_text="Yes",
                secondary_text="No",
                tone="warning",
            )
        )
        if remove_confirmed:
            await self.app.state.cart.remove_from_cart(product_id)
            self.post_message(CartChangedMessage())
            self.notify("Item removed from cart.", severity="information")

    @on(Button.Pressed, "#btn-apply-promo")
    @work(exclusive=True)
    async def handle_apply_promo(self) -> None:
        state = self.app.state
        code = self.query_one("#input-promo", Input).value
        button = self.query_one("#btn-apply-promo", Button)
        button.disabled = True
        try:
            discount = await state.promos.apply(code, state.cart.total_price)
        except StoreError as e:
            self.notify(e.message, severity="error")
            return
        finally:
            button.disabled = False
        if discount is None:
            return
        state.discount = discount
        self.notify("Promo code applied successfully!")
        self.post_message(CartChangedMessage())

    @on(Button.Pressed, "#btn-clear-cart")
    @work()
    async def handle_clear_cart(self) -> None:
        if self.app.state.cart.is_empty:
            self.app.notify("Cart is empty.", severity="warning")
            return

        remove_confirmed = await self.app.push_screen_wait(
            DialogModal(
                "Do you really want to remove all items from cart?",
                primary_text="Yes",
                secondary_text="No",
                tone="error",
            )
        )
        if remove_confirmed:
            await self.app.state.cart.clear_cart()
            self.post_message(CartChangedMessage())

    @on(Button.Pressed, "#btn-checkout")
    @work()
    async def handle_checkout(self) -> None:
        state = self.app.state
        if not state.session.is_authenticated:
            self.app.notify("Please log in to checkout", severity="error")
            return
        if state.cart.is_empty:
            self.app.notify("Your cart is empty", severity="error")
            return

        order_id = await self.app.push_screen_wait(CheckoutModal())
        if order_id:
            state.discount = None
            self.app.post_message(NewOrderMessage(order_id))
        self.post_message(CartChangedMessage())

from textual import events, on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.validation import Number
from textual.widgets import Button, Input, Label, MarkdownViewer

from stores.models import CartLine, Product
from utils.messages import CartChangedMessage
from utils.pure import markdown_table, money


class ProdDetailModal(ModalScreen[bool]):
    """
    Product detail plus add-to-cart.
    Returns True if the cart changed, False if not.
    """

    CSS = """
    #input-order-qty {
        width: 10;
    }
    #btn-sub-qty, #btn-add-qty {
        min-width: 4
    }
    """

    order_qty = reactive(1)

    def __init__(self, product_id: str) -> None:
        super().__init__()

        self._product_id = product_id

        self._prod: Product = None
        self._existing_line: CartLine = None

    def compose(self) -> ComposeResult:
        with Horizontal(id="hort-prod-detail"):
            yield MarkdownViewer("", show_table_of_contents=False)
            with Vertical():
                yield Label("Quantity")
                with Horizontal():
                    yield Button("-", id="btn-sub-qty")
                    yield Input(value="1", id="input-order-qty", type="integer")
                    yield Button("+", id="btn-add-qty")
                with Horizontal():
                    yield Button("Go Back", id="btn-quit")
                    yield Button("Add to Cart", id="btn-addcart", variant="primary")

    async def on_mount(self):
        state = self.app.state
        self._prod = state.catalog.get_by_id(self._product_id)
        if self._prod is None:
            self.notify("Product not found.", severity="error")
            self.dismiss(False)
            return

        related = state.catalog.related(self._prod)
        md = (
            f"### {self._prod.name}\n\n"
            f"**{money(self._prod.price)}** · {self._prod.category.title()}\n\n"
            f"{self._prod.description}\n\n"
        )
        if related:
            md += "#### You might also like\n\n" + markdown_table(
                ["Product", "Price"],
                [[p.name, money(p.price)] for p in related],
                ["l", "r"],
            )
        await self.query_one(MarkdownViewer).document.update(md)

        self.query_one("#input-order-qty").validators = [Number(minimum=1)]

        self._existing_line = state.cart.get_line(self._product_id)
        if self._existing_line:
            self.order_qty = self._existing_line.quantity
            self.query_one("#btn-addcart").label = "Update Cart"

        self.query_one("#input-order-qty").focus()

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            self.dismiss(False)

    async def on_input_changed(self, message: Input.Changed) -> None:
        if (
            message.input.id == "input-order-qty"
            and message.value.isdigit()
            and self.focused == message.input
        ):
            self.order_qty = max(int(message.value), 1)

    def watch_order_qty(self, qty: int):
        self.query_one("#btn-sub-qty").disabled = qty <= 1
        input_order_qty = self.query_one("#input-order-qty", Input)
        if input_order_qty.value != str(qty):
            input_order_qty.value = str(qty)

    @on(Button.Pressed, "#btn-add-qty")
    def handle_add_qty(self):
        self.order_qty += 1

    @on(Button.Pressed, "#btn-sub-qty")
    def handle_sub_qty(self):
        if self.order_qty > 1:
            self.order_qty -= 1

    @on(Button.Pressed, "#btn-quit")
    def handle_quit(self):
        self.dismiss(False)

    @on(Button.Pressed, "#btn-addcart")
    @work(exclusive=True)
    async def handle_addcart(self):
        cart = self.app.state.cart
        if not self._existing_line:
            await cart.add_to_cart(self._prod, self.order_qty)
            self.app.notify(f"{self._prod.name} added to cart.")
        else:
            await cart.update_quantity(self._prod.id, self.order_qty)
            self.app.notify("Updated cart item quantity.")

        self.app.post_message(CartChangedMessage())
        self.dismiss(True)

from textual import events, on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, MarkdownViewer, Select

from stores.checkout import checkout
from stores.errors import StoreError
from stores.models import PaymentMethod, PaymentType, ShippingAddress
from stores.orders import expected_delivery
from utils.pure import markdown_table, money
from views.modal_dialog import DialogModal

PAYMENT_LABELS = {
    PaymentType.CREDIT_CARD: "Credit Card",
    PaymentType.PAYPAL: "PayPal",
    PaymentType.BANK_TRANSFER: "Bank Transfer",
}

ADDRESS_FIELDS = [
    ("street", "Street", "123 Main St"),
    ("city", "City", "Anytown"),
    ("state", "State", "CA"),
    ("zip_code", "Zip Code", "12345"),
    ("country", "Country", "USA"),
]


class CheckoutModal(ModalScreen[str]):
    """
    Order summary, shipping address and payment method.
    Dismisses with the new order id, or "" when the user backs out.
    """

    def compose(self) -> ComposeResult:
        with VerticalScroll():
            yield MarkdownViewer("", show_table_of_contents=False)
            yield Label("Shipping Address")
            for name, label, value in ADDRESS_FIELDS:
                yield Input(value=value, placeholder=label, id=f"input-{name}")
            yield Label("Payment Method")
            yield Select(
                [(label, t.value) for t, label in PAYMENT_LABELS.items()],
                value=PaymentType.CREDIT_CARD.value,
                allow_blank=False,
                id="select-payment",
            )
            yield Input(
                value="4242",
                placeholder="Card last four digits",
                id="input-last-four",
                max_length=4,
            )
            with Horizontal():
                yield Button("Go Back", id="btn-quit")
                yield Button("Place Order", id="btn-submit", variant="primary")

    async def on_mount(self):
        cart = self.app.state.cart
        rows = [
            [
                line.product.name,
                money(line.product.price),
                line.quantity,
                money(line.line_total),
            ]
            for line in cart.lines
        ]
        md = "### Order Summary\n\n" + markdown_table(
            ["Product", "Unit Price", "Quantity", "Total"], rows, ["l", "r", "c", "r"]
        )
        md += f"\n\n**Subtotal:** {money(cart.total_price)}"
        await self.query_one(MarkdownViewer).document.update(md)
        self.query_one("#input-street").focus()

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            self.dismiss("")

    @on(Select.Changed, "#select-payment")
    def handle_payment_change(self, event: Select.Changed) -> None:
        self.query_one("#input-last-four").display = (
            event.value == PaymentType.CREDIT_CARD.value
        )

    def _read_address(self):
        values = {}
        for name, label, _ in ADDRESS_FIELDS:
            field = self.query_one(f"#input-{name}", Input)
            if not field.value.strip():
                field.focus()
                field.add_class("-invalid")
                self.notify(f"{label} is required.", severity="error")
                return None
            values[name] = field.value.strip()
        return ShippingAddress(name=self.app.state.session.user.name, **values)

    def _read_payment(self):
        payment_type = PaymentType(self.query_one("#select-payment", Select).value)
        if payment_type != PaymentType.CREDIT_CARD:
            return PaymentMethod(type=payment_type)
        last_four = self.query_one("#input-last-four", Input).value.strip()
        try:
            return PaymentMethod(type=payment_type, last_four=last_four)
        except ValueError:
            self.notify("Enter the last four digits of the card.", severity="error")
            self.query_one("#input-last-four").focus()
            return None

    @on(Button.Pressed, "#btn-submit")
    @work(exclusive=True)
    async def handle_submit(self):
        address = self._read_address()
        if address is None:
            return
        payment = self._read_payment()
        if payment is None:
            return

        if not await self.app.push_screen_wait(
            DialogModal(
                "Place order? This cannot be undone.",
                primary_text="Yes",
                secondary_text="No",
                tone="positive",
            )
        ):
            return

        state = self.app.state
        try:
            order = await checkout(
                state.session, state.cart, state.orders, address, payment
            )
        except StoreError as e:
            self.notify(e.message, severity="error")
            self.dismiss("")
            return

        self.notify(
            f"Order placed. Your order number is {order.id}, "
            f"expected by {expected_delivery(order):%Y-%m-%d}."
        )
        self.dismiss(order.id)

    @on(Button.Pressed, "#btn-quit")
    def handle_quit(self):
        self.dismiss("")

from __future__ import annotations

from typing import Optional

from stores.cart import CartStore
from stores.errors import EmptyCart, NotAuthenticated
from stores.models import Order, PaymentMethod, PaymentType, ShippingAddress, User
from stores.orders import OrderStore
from stores.session import SessionStore
from utils.logger import get_logger

_logger = get_logger(__name__)


def default_address(user: User) -> ShippingAddress:
    return ShippingAddress(
        name=user.name,
        street="123 Main St",
        city="Anytown",
        state="CA",
        zip_code="12345",
        country="USA",
    )


DEFAULT_PAYMENT = PaymentMethod(type=PaymentType.CREDIT_CARD, last_four="4242")


async def checkout(
    session: SessionStore,
    cart: CartStore,
    orders: OrderStore,
    shipping_address: Optional[ShippingAddress] = None,
    payment_method: Optional[PaymentMethod] = None,
) -> Order:
    """
    Turn the cart into an order for the logged-in user, then empty the cart.

    The cart is only cleared once the order exists; if creating it raises,
    the cart is left as it was.
    """
    if not session.is_authenticated:
        raise NotAuthenticated()
    if cart.is_empty:
        raise EmptyCart()

    user = session.user
    order = orders.create_order(
        user.id,
        cart.lines,
        shipping_address or default_address(user),
        payment_method or DEFAULT_PAYMENT,
    )
    await cart.clear_cart()
    _logger.info(f"Checkout complete for {user.email}, order {order.id}")
    return order

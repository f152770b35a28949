from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from stores.cart import CartStore
from stores.catalog import CatalogStore
from stores.orders import OrderStore
from stores.pricing import PromoCodes
from stores.session import SessionStore
from stores.snapshot import SqliteSnapshotStore
from utils import config


@dataclass
class AppState:
    """
    The stores shared by every screen.

    Fields:
      - catalog: read-only products
      - session: current identity (anonymous until login/signup)
      - cart: line items, persisted on every change
      - orders: order history for this process
      - promos: promo code lookup used by the cart screen
      - discount: promo discount applied to the current cart, if any
    """

    catalog: CatalogStore = field(default_factory=CatalogStore)
    session: SessionStore = field(default_factory=SessionStore)
    cart: CartStore = field(default_factory=CartStore)
    orders: OrderStore = field(default_factory=OrderStore)
    promos: PromoCodes = field(default_factory=PromoCodes)
    discount: Optional[float] = None

    @classmethod
    async def open(cls, db_path: Optional[str] = None) -> "AppState":
        """Build stores over the SQLite snapshot file and restore the last session."""
        db_path = db_path or config.DB_PATH
        state = cls(
            session=SessionStore(
                snapshot=SqliteSnapshotStore(config.SESSION_KEY, db_path),
                delay=config.AUTH_DELAY,
            ),
            cart=CartStore(snapshot=SqliteSnapshotStore(config.CART_KEY, db_path)),
            promos=PromoCodes(delay=config.PROMO_DELAY),
        )
        await state.session.restore()
        await state.cart.load()
        return state

from __future__ import annotations

import json
from typing import Iterable, List, Optional, Tuple

from stores.errors import PersistedDataCorrupt
from stores.models import CartLine, Product, line_from_dict, line_to_dict
from stores.snapshot import MemorySnapshotStore, SnapshotStore
from utils.logger import get_logger

_logger = get_logger(__name__)


def encode_cart(lines: Iterable[CartLine]) -> str:
    return json.dumps([line_to_dict(line) for line in lines])


def decode_cart(blob: str) -> List[CartLine]:
    """Parse a cart snapshot; raises PersistedDataCorrupt on anything malformed."""
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        raise PersistedDataCorrupt(f"cart snapshot is not JSON: {e}") from e
    if not isinstance(data, list):
        raise PersistedDataCorrupt("cart snapshot is not a list")

    lines = [line_from_dict(item) for item in data]
    seen = set()
    for line in lines:
        if line.product.id in seen:
            raise PersistedDataCorrupt(
                f"duplicate line for product {line.product.id}"
            )
        seen.add(line.product.id)
    return lines


class CartStore:
    """
    Line items of the current session's cart.

    Holds at most one line per product id. Every mutation writes the whole cart
    to the snapshot before returning; totals are computed on each read.
    """

    def __init__(
        self,
        snapshot: Optional[SnapshotStore] = None,
        lines: Iterable[CartLine] = (),
    ):
        self._snapshot = snapshot or MemorySnapshotStore()
        self._lines: List[CartLine] = list(lines)

    @property
    def lines(self) -> Tuple[CartLine, ...]:
        return tuple(self._lines)

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self._lines)

    @property
    def total_price(self) -> float:
        return sum(
            (line.product.price * line.quantity for line in self._lines), 0.0
        )

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get_line(self, product_id: str) -> Optional[CartLine]:
        return next(
            (line for line in self._lines if line.product.id == product_id), None
        )

    async def load(self) -> Tuple[CartLine, ...]:
        """Replace the in-memory cart with the persisted one; corrupt data empties it."""
        blob = await self._snapshot.load()
        if blob is None:
            self._lines = []
            return self.lines
        try:
            self._lines = decode_cart(blob)
        except PersistedDataCorrupt as e:
            _logger.warning(f"Discarding unreadable cart snapshot: {e}")
            self._lines = []
            await self._snapshot.clear()
        return self.lines

    async def _persist(self) -> None:
        await self._snapshot.save(encode_cart(self._lines))

    # ---------------------------
    # Mutations
    # ---------------------------

    async def add_to_cart(self, product: Product, quantity: int = 1) -> None:
        """
        Increment the product's line by quantity, or append a new line.
        A line whose quantity ends up below 1 is dropped.
        """
        existing = self.get_line(product.id)
        if existing:
            merged = existing.quantity + quantity
            self._lines = [
                CartLine(line.product, merged)
                if line.product.id == product.id
                else line
                for line in self._lines
                if line.product.id != product.id or merged >= 1
            ]
        elif quantity >= 1:
            self._lines.append(CartLine(product, quantity))
        _logger.debug(f"Added {quantity} x {product.id} to cart")
        await self._persist()

    async def remove_from_cart(self, product_id: str) -> None:
        self._lines = [
            line for line in self._lines if line.product.id != product_id
        ]
        _logger.debug(f"Removed {product_id} from cart")
        await self._persist()

    async def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity in place; anything below 1 removes the line."""
        if quantity < 1:
            await self.remove_from_cart(product_id)
            return
        self._lines = [
            CartLine(line.product, quantity)
            if line.product.id == product_id
            else line
            for line in self._lines
        ]
        _logger.debug(f"Set {product_id} quantity to {quantity}")
        await self._persist()

    async def clear_cart(self) -> None:
        self._lines = []
        _logger.debug("Cart cleared")
        await self._persist()

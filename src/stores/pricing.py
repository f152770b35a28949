# cart page figures: shipping, tax, promo discounts
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional

from stores.errors import InvalidPromoCode
from utils.logger import get_logger

_logger = get_logger(__name__)

FREE_SHIPPING_OVER = 100.0
SHIPPING_FEE = 9.99
TAX_RATE = 0.08

# code -> fraction of the subtotal taken off
PROMO_CODES: Dict[str, float] = {"SAVE20": 0.20}


@dataclass(frozen=True)
class CartSummary:
    subtotal: float
    shipping: float
    tax: float
    discount: float
    total: float


def summarize(subtotal: float, discount: float = 0.0) -> CartSummary:
    """Totals shown under the cart. Shipping is free over $100 and for an empty cart."""
    if subtotal <= 0:
        shipping = 0.0
    elif subtotal > FREE_SHIPPING_OVER:
        shipping = 0.0
    else:
        shipping = SHIPPING_FEE
    tax = subtotal * TAX_RATE
    return CartSummary(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        discount=discount,
        total=subtotal + shipping + tax - discount,
    )


class PromoCodes:
    """Promo code lookup behind a simulated server delay."""

    def __init__(
        self,
        codes: Optional[Dict[str, float]] = None,
        delay: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._codes = {k.upper(): v for k, v in (codes or PROMO_CODES).items()}
        self._delay = delay
        self._sleep = sleep

    async def apply(self, code: str, subtotal: float) -> Optional[float]:
        """
        Return the discount amount for code against subtotal.
        Blank codes return None right away; unknown codes raise InvalidPromoCode.
        """
        code = (code or "").strip()
        if not code:
            return None
        await self._sleep(self._delay)
        rate = self._codes.get(code.upper())
        if rate is None:
            _logger.debug(f"Rejected promo code {code!r}")
            raise InvalidPromoCode()
        return subtotal * rate

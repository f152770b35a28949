from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set

from stores import seed
from stores.models import Product

SORT_KEYS = ("featured", "price-low-high", "price-high-low", "newest")


class CatalogStore:
    """
    Read-only product catalog.

    The product tuple is fixed at construction, so every method is a pure lookup
    and the same instance can be shared by any number of readers.
    """

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._products = tuple(seed.PRODUCTS if products is None else products)

    def __len__(self) -> int:
        return len(self._products)

    def list(self) -> List[Product]:
        return list(self._products)

    def get_by_id(self, product_id: str) -> Optional[Product]:
        return next((p for p in self._products if p.id == product_id), None)

    def by_category(self, category: str) -> List[Product]:
        return [p for p in self._products if p.category == category]

    def categories(self) -> Set[str]:
        return {p.category for p in self._products}

    def search(self, query: str, include_category: bool = False) -> List[Product]:
        """
        Case-insensitive substring match over name and description.
        include_category also matches the category label (admin product search).
        An empty query matches everything.
        """
        needle = (query or "").lower()

        def matches(p: Product) -> bool:
            fields = [p.name, p.description]
            if include_category:
                fields.append(p.category)
            return any(needle in f.lower() for f in fields)

        return [p for p in self._products if matches(p)]

    # ---------------------------
    # Listing helpers
    # ---------------------------

    def filter_products(
        self,
        query: str = "",
        categories: Sequence[str] = (),
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        sort: str = "featured",
    ) -> List[Product]:
        """
        The product listing pipeline: search, then categories, then the
        inclusive price range, then sort.

        Args:
            query: search text, ignored when blank.
            categories: keep only these categories; empty keeps all.
            min_price / max_price: inclusive bounds, None for open.
            sort: one of SORT_KEYS. "featured" and "newest" keep catalog order.

        Returns:
            list of matching products.
        """
        if sort not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {sort}")

        products = self.search(query) if query and query.strip() else self.list()
        if categories:
            wanted = set(categories)
            products = [p for p in products if p.category in wanted]
        if min_price is not None:
            products = [p for p in products if p.price >= min_price]
        if max_price is not None:
            products = [p for p in products if p.price <= max_price]

        if sort == "price-low-high":
            products.sort(key=lambda p: p.price)
        elif sort == "price-high-low":
            products.sort(key=lambda p: p.price, reverse=True)
        return products

    def related(self, product: Product, limit: int = 4) -> List[Product]:
        """Other products from the same category, catalog order."""
        same = [
            p
            for p in self._products
            if p.category == product.category and p.id != product.id
        ]
        return same[:limit]

    def featured(self, category: Optional[str] = None, limit: int = 4) -> List[Product]:
        products = self.by_category(category) if category else self.list()
        return products[:limit]

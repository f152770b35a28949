import unittest

import helpers  # noqa: F401

from stores.catalog import CatalogStore
from stores.models import Product


class CatalogTestCase(unittest.TestCase):
    def setUp(self):
        self.catalog = CatalogStore()

    # ---------- lookups ----------

    def test_list_is_stable_and_complete(self):
        ids = [p.id for p in self.catalog.list()]
        self.assertEqual(ids, [str(i) for i in range(1, 13)])
        self.assertEqual(ids, [p.id for p in self.catalog.list()])
        self.assertEqual(len(self.catalog), 12)

    def test_list_returns_a_copy(self):
        products = self.catalog.list()
        products.clear()
        self.assertEqual(len(self.catalog.list()), 12)

    def test_get_by_id(self):
        prod = self.catalog.get_by_id("3")
        self.assertEqual(prod.name, "Professional Camera")
        self.assertAlmostEqual(prod.price, 1299.99)
        self.assertIsNone(self.catalog.get_by_id("999"))

    def test_by_category_and_categories(self):
        fashion = self.catalog.by_category("fashion")
        self.assertEqual([p.id for p in fashion], ["4", "5", "7", "8", "11"])
        self.assertEqual(self.catalog.by_category("toys"), [])
        self.assertEqual(self.catalog.categories(), {"electronics", "fashion"})

    def test_categories_follow_the_products_given(self):
        catalog = CatalogStore(
            [Product("a", "Mug", 5.0, "Ceramic mug", "", "kitchen")]
        )
        self.assertEqual(catalog.categories(), {"kitchen"})

    # ---------- search ----------

    def test_search_is_case_insensitive_over_name_and_description(self):
        by_name = self.catalog.search("SPEAKER")
        self.assertEqual([p.id for p in by_name], ["6", "12"])

        by_descr = self.catalog.search("rfid")
        self.assertEqual([p.id for p in by_descr], ["7"])

    def test_search_without_matches_returns_empty(self):
        self.assertEqual(self.catalog.search("submarine"), [])

    def test_search_ignores_category_unless_asked(self):
        self.assertEqual(self.catalog.search("fashion"), [])
        admin = self.catalog.search("fashion", include_category=True)
        self.assertEqual(len(admin), 5)

    # ---------- listing helpers ----------

    def test_filter_products_pipeline(self):
        res = self.catalog.filter_products(
            query="watch",
            categories=["fashion"],
            max_price=200,
            sort="price-high-low",
        )
        self.assertEqual([p.id for p in res], ["8"])

        res = self.catalog.filter_products(
            categories=["electronics"], min_price=100, sort="price-low-high"
        )
        prices = [p.price for p in res]
        self.assertEqual(prices, sorted(prices))
        self.assertTrue(all(p >= 100 for p in prices))

    def test_filter_products_featured_keeps_catalog_order(self):
        res = self.catalog.filter_products(query="   ")
        self.assertEqual(res, self.catalog.list())

    def test_filter_products_price_bounds_are_inclusive(self):
        res = self.catalog.filter_products(min_price=49.99, max_price=59.99)
        self.assertEqual([p.id for p in res], ["7", "10"])

    def test_filter_products_rejects_unknown_sort(self):
        with self.assertRaises(ValueError):
            self.catalog.filter_products(sort="alphabetical")

    def test_related_and_featured(self):
        camera = self.catalog.get_by_id("3")
        related = self.catalog.related(camera)
        self.assertEqual([p.id for p in related], ["1", "2", "6", "9"])
        self.assertNotIn(camera, related)

        self.assertEqual(
            [p.id for p in self.catalog.featured("fashion")], ["4", "5", "7", "8"]
        )
        self.assertEqual(len(self.catalog.featured(limit=8)), 8)

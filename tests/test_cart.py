import json
import unittest

import helpers  # noqa: F401

from stores.cart import CartStore, decode_cart, encode_cart
from stores.catalog import CatalogStore
from stores.errors import PersistedDataCorrupt
from stores.models import CartLine
from stores.snapshot import MemorySnapshotStore


class CartTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        catalog = CatalogStore()
        self.headphones = catalog.get_by_id("1")  # 199.99
        self.watch = catalog.get_by_id("2")  # 299.99
        self.wallet = catalog.get_by_id("7")  # 49.99
        self.snapshot = MemorySnapshotStore()
        self.cart = CartStore(snapshot=self.snapshot)

    def quantities(self):
        return [(line.product.id, line.quantity) for line in self.cart.lines]

    # ---------- add ----------

    async def test_add_defaults_to_one(self):
        await self.cart.add_to_cart(self.headphones)
        self.assertEqual(self.quantities(), [("1", 1)])

    async def test_repeated_adds_merge_into_one_line(self):
        for qty in (1, 3, 2):
            await self.cart.add_to_cart(self.headphones, qty)
        self.assertEqual(self.quantities(), [("1", 6)])
        self.assertEqual(self.cart.total_items, 6)

    async def test_add_preserves_line_order(self):
        await self.cart.add_to_cart(self.headphones)
        await self.cart.add_to_cart(self.watch)
        await self.cart.add_to_cart(self.wallet)
        await self.cart.add_to_cart(self.headphones, 2)
        self.assertEqual(self.quantities(), [("1", 3), ("2", 1), ("7", 1)])

    # ---------- remove / update / clear ----------

    async def test_remove(self):
        await self.cart.add_to_cart(self.headphones)
        await self.cart.add_to_cart(self.watch)
        await self.cart.remove_from_cart("1")
        self.assertEqual(self.quantities(), [("2", 1)])

        # absent id is a no-op
        await self.cart.remove_from_cart("999")
        self.assertEqual(self.quantities(), [("2", 1)])

    async def test_update_quantity_in_place(self):
        await self.cart.add_to_cart(self.headphones)
        await self.cart.add_to_cart(self.watch)
        await self.cart.add_to_cart(self.wallet)
        await self.cart.update_quantity("2", 5)
        self.assertEqual(self.quantities(), [("1", 1), ("2", 5), ("7", 1)])

        await self.cart.update_quantity("999", 4)
        self.assertEqual(self.quantities(), [("1", 1), ("2", 5), ("7", 1)])

    async def test_update_below_one_matches_remove(self):
        for q in (0, -3):
            updated = CartStore()
            removed = CartStore()
            for cart in (updated, removed):
                await cart.add_to_cart(self.headphones, 2)
                await cart.add_to_cart(self.watch)
            await updated.update_quantity("1", q)
            await removed.remove_from_cart("1")
            self.assertEqual(updated.lines, removed.lines)

    async def test_clear(self):
        await self.cart.add_to_cart(self.headphones)
        await self.cart.add_to_cart(self.watch)
        await self.cart.clear_cart()
        self.assertTrue(self.cart.is_empty)
        self.assertEqual(self.cart.total_items, 0)
        self.assertEqual(self.cart.total_price, 0.0)

    # ---------- totals ----------

    async def test_totals_follow_every_mutation(self):
        await self.cart.add_to_cart(self.headphones, 2)
        await self.cart.add_to_cart(self.wallet)
        self.assertEqual(self.cart.total_items, 3)
        self.assertAlmostEqual(self.cart.total_price, 2 * 199.99 + 49.99)

        await self.cart.update_quantity("7", 4)
        self.assertEqual(self.cart.total_items, 6)
        self.assertAlmostEqual(self.cart.total_price, 2 * 199.99 + 4 * 49.99)

        await self.cart.remove_from_cart("1")
        self.assertEqual(self.cart.total_items, 4)
        self.assertAlmostEqual(self.cart.total_price, 4 * 49.99)

        await self.cart.clear_cart()
        self.assertEqual(self.cart.total_price, 0.0)

    # ---------- persistence ----------

    async def test_every_mutation_persists(self):
        await self.cart.add_to_cart(self.headphones)
        await self.cart.update_quantity("1", 3)
        await self.cart.add_to_cart(self.watch)
        await self.cart.remove_from_cart("2")
        await self.cart.clear_cart()
        self.assertEqual(self.snapshot.writes, 5)
        self.assertEqual(json.loads(self.snapshot.blob), [])

    async def test_reload_round_trip(self):
        await self.cart.add_to_cart(self.watch, 2)
        await self.cart.add_to_cart(self.headphones)
        await self.cart.add_to_cart(self.wallet, 3)

        reloaded = CartStore(snapshot=self.snapshot)
        await reloaded.load()
        self.assertEqual(reloaded.lines, self.cart.lines)
        self.assertAlmostEqual(reloaded.total_price, self.cart.total_price)

    async def test_non_positive_add_keeps_cart_loadable(self):
        await self.cart.add_to_cart(self.headphones, 2)
        await self.cart.add_to_cart(self.watch, 0)
        self.assertEqual(self.quantities(), [("1", 2)])

        # merging down to zero drops the line
        await self.cart.add_to_cart(self.wallet, 1)
        await self.cart.add_to_cart(self.wallet, -1)
        self.assertEqual(self.quantities(), [("1", 2)])
        self.assertEqual(self.snapshot.writes, 4)

        reloaded = CartStore(snapshot=self.snapshot)
        await reloaded.load()
        self.assertEqual(reloaded.lines, self.cart.lines)

    async def test_snapshot_shape(self):
        await self.cart.add_to_cart(self.wallet, 2)
        data = json.loads(self.snapshot.blob)
        self.assertEqual(data[0]["quantity"], 2)
        self.assertEqual(data[0]["product"]["id"], "7")
        self.assertEqual(data[0]["product"]["category"], "fashion")

    async def test_load_without_snapshot_is_empty(self):
        self.assertEqual(await self.cart.load(), ())

    async def test_corrupt_snapshot_loads_empty(self):
        good_line = {
            "product": {
                "id": "1",
                "name": "x",
                "price": 1.0,
                "description": "",
                "image": "",
                "category": "c",
            },
            "quantity": 1,
        }
        blobs = [
            "not json at all",
            json.dumps({"items": []}),
            json.dumps([{"quantity": 1}]),
            json.dumps([{**good_line, "quantity": 0}]),
            json.dumps([{**good_line, "quantity": "2"}]),
            json.dumps([good_line, good_line]),
        ]
        for blob in blobs:
            snapshot = MemorySnapshotStore(blob)
            cart = CartStore(snapshot=snapshot)
            self.assertEqual(await cart.load(), ())
            self.assertTrue(cart.is_empty)
            self.assertIsNone(snapshot.blob)

    # ---------- codec ----------

    def test_decode_rejects_bad_price(self):
        blob = json.dumps(
            [
                {
                    "product": {"id": "1", "name": "x", "price": "free", "category": "c"},
                    "quantity": 1,
                }
            ]
        )
        with self.assertRaises(PersistedDataCorrupt):
            decode_cart(blob)

    def test_encode_keeps_order(self):
        lines = [CartLine(self.wallet, 1), CartLine(self.headphones, 2)]
        self.assertEqual(decode_cart(encode_cart(lines)), lines)

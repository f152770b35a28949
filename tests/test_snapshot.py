import asyncio
import json
import os
import tempfile
import unittest

from helpers import RecordingSleep

from stores.cart import CartStore
from stores.catalog import CatalogStore
from stores.session import SessionStore
from stores.snapshot import SqliteSnapshotStore, connect
from utils import config
from utils.state import AppState


class SqliteSnapshotTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        # Each test gets its own database file
        self.temp_dir = tempfile.TemporaryDirectory()
        self.db_path = os.path.join(self.temp_dir.name, "nested", "test.sqlite")

    def tearDown(self):
        self.temp_dir.cleanup()

    # ---------- raw key-value ----------

    async def test_table_created_on_first_connect(self):
        async with connect(self.db_path) as conn:
            cur = await conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table';"
            )
            tables = [row[0] for row in await cur.fetchall()]
            await cur.close()
        self.assertIn("snapshots", tables)
        self.assertTrue(os.path.exists(self.db_path))

    async def test_save_load_clear(self):
        store = SqliteSnapshotStore("k", self.db_path)
        self.assertIsNone(await store.load())

        await store.save("first")
        self.assertEqual(await store.load(), "first")

        # saving again replaces the row
        await store.save("second")
        self.assertEqual(await store.load(), "second")

        await store.clear()
        self.assertIsNone(await store.load())
        # clearing a missing key is fine
        await store.clear()

    async def test_keys_are_independent(self):
        a = SqliteSnapshotStore("a", self.db_path)
        b = SqliteSnapshotStore("b", self.db_path)
        await a.save("A")
        await b.save("B")
        await a.clear()
        self.assertIsNone(await a.load())
        self.assertEqual(await b.load(), "B")

    async def _concurrent_first_saves(self, name):
        path = os.path.join(self.temp_dir.name, name)
        stores = [SqliteSnapshotStore(f"k{i}", path) for i in range(5)]
        await asyncio.gather(*(s.save(s.key) for s in stores))
        loaded = await asyncio.gather(*(s.load() for s in stores))
        self.assertEqual(loaded, [s.key for s in stores])

    # each test runs on its own event loop; both must get through table setup
    async def test_concurrent_setup_first_loop(self):
        await self._concurrent_first_saves("a.sqlite")

    async def test_concurrent_setup_second_loop(self):
        await self._concurrent_first_saves("b.sqlite")

    # ---------- stores over sqlite ----------

    async def test_cart_survives_restart(self):
        catalog = CatalogStore()
        cart = CartStore(SqliteSnapshotStore(config.CART_KEY, self.db_path))
        await cart.add_to_cart(catalog.get_by_id("3"), 2)
        await cart.add_to_cart(catalog.get_by_id("9"))

        reopened = CartStore(SqliteSnapshotStore(config.CART_KEY, self.db_path))
        await reopened.load()
        self.assertEqual(reopened.lines, cart.lines)

        await reopened.clear_cart()
        again = CartStore(SqliteSnapshotStore(config.CART_KEY, self.db_path))
        await again.load()
        self.assertTrue(again.is_empty)

    async def test_session_survives_restart(self):
        session = SessionStore(
            SqliteSnapshotStore(config.SESSION_KEY, self.db_path),
            sleep=RecordingSleep(),
        )
        user = await session.login("admin@example.com", "admin123")

        reopened = SessionStore(SqliteSnapshotStore(config.SESSION_KEY, self.db_path))
        self.assertEqual(await reopened.restore(), user)
        self.assertTrue(reopened.is_admin)

        await reopened.logout()
        third = SessionStore(SqliteSnapshotStore(config.SESSION_KEY, self.db_path))
        self.assertIsNone(await third.restore())
        self.assertFalse(third.is_authenticated)

    async def test_app_state_open(self):
        blob = json.dumps(
            {
                "id": "1",
                "email": "user@example.com",
                "name": "John Doe",
                "role": "user",
            }
        )
        await SqliteSnapshotStore(config.SESSION_KEY, self.db_path).save(blob)
        await SqliteSnapshotStore(config.CART_KEY, self.db_path).save("garbage")

        state = await AppState.open(self.db_path)
        self.assertTrue(state.session.is_authenticated)
        self.assertEqual(state.session.user.name, "John Doe")
        # unreadable cart is dropped and removed from disk
        self.assertTrue(state.cart.is_empty)
        self.assertIsNone(
            await SqliteSnapshotStore(config.CART_KEY, self.db_path).load()
        )
        self.assertIsNone(state.discount)
        self.assertEqual(len(state.catalog), 12)

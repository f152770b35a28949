# snapshot persistence: the key-value boundary the stores write through
from __future__ import annotations

import asyncio
import os
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Protocol, Set

import aiosqlite

from utils import config
from utils.logger import get_logger

_logger = get_logger(__name__)

_initialized: Set[str] = set()
# one lock per event loop; an asyncio.Lock is bound to the loop it first waits on
_init_locks: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock] = (
    weakref.WeakKeyDictionary()
)


def _init_lock() -> asyncio.Lock:
    loop = asyncio.get_running_loop()
    lock = _init_locks.get(loop)
    if lock is None:
        lock = _init_locks[loop] = asyncio.Lock()
    return lock


class SnapshotStore(Protocol):
    """Where one store keeps its serialized state between runs."""

    async def load(self) -> Optional[str]: ...

    async def save(self, blob: str) -> None: ...

    async def clear(self) -> None: ...


class MemorySnapshotStore:
    """Keeps the blob on the instance. Used by tests and throwaway sessions."""

    def __init__(self, blob: Optional[str] = None):
        self.blob = blob
        self.writes = 0

    async def load(self) -> Optional[str]:
        return self.blob

    async def save(self, blob: str) -> None:
        self.blob = blob
        self.writes += 1

    async def clear(self) -> None:
        self.blob = None
        self.writes += 1


async def _init_db(conn: aiosqlite.Connection) -> None:
    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS snapshots (
            key   TEXT PRIMARY KEY,
            value TEXT NOT NULL
        );
        """
    )
    await conn.commit()


@asynccontextmanager
async def connect(db_path: str) -> AsyncIterator[aiosqlite.Connection]:
    """Async context manager yielding an aiosqlite connection.

    Creates the snapshots table the first time a given path is opened.
    """
    folder = os.path.dirname(db_path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    conn = await aiosqlite.connect(db_path)

    if db_path not in _initialized:
        async with _init_lock():
            if db_path not in _initialized:
                _logger.info(f"Initializing snapshot database at {db_path}...")
                await _init_db(conn)
                _initialized.add(db_path)
    try:
        yield conn
    finally:
        await conn.close()


class SqliteSnapshotStore:
    """
    One row of the snapshots table, addressed by key.

    Several stores can share a database file, each with its own key.
    """

    def __init__(self, key: str, db_path: Optional[str] = None):
        self.key = key
        self.db_path = db_path or config.DB_PATH

    async def load(self) -> Optional[str]:
        async with connect(self.db_path) as conn:
            cur = await conn.execute(
                "SELECT value FROM snapshots WHERE key = ?;", (self.key,)
            )
            row = await cur.fetchone()
            await cur.close()
        _logger.debug(f"Loaded snapshot '{self.key}' (present={row is not None})")
        return row[0] if row else None

    async def save(self, blob: str) -> None:
        async with connect(self.db_path) as conn:
            await conn.execute(
                """
                INSERT INTO snapshots(key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value;
                """,
                (self.key, blob),
            )
            await conn.commit()
        _logger.debug(f"Saved snapshot '{self.key}' ({len(blob)} bytes)")

    async def clear(self) -> None:
        async with connect(self.db_path) as conn:
            await conn.execute("DELETE FROM snapshots WHERE key = ?;", (self.key,))
            await conn.commit()
        _logger.debug(f"Cleared snapshot '{self.key}'")

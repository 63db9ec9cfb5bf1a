"""SQLite driver: stdlib ``sqlite3`` on anyio worker threads.

One connection per ``Database``, opened in autocommit mode. Each call
runs its statement and its fetch in a single worker-thread hop. Successive
hops may land on different threads, hence ``check_same_thread=False``;
an ``anyio.Lock`` keeps them from overlapping on the shared connection.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Callable, Sequence
from typing import Any

import anyio
from anyio import to_thread


class SqliteDriver:
    __slots__ = ("_conn", "_lock")

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._lock = anyio.Lock()

    @classmethod
    async def open(cls, path: str) -> SqliteDriver:
        def connect() -> sqlite3.Connection:
            conn = sqlite3.connect(path, autocommit=True, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys=ON")
            return conn

        return cls(await to_thread.run_sync(connect))

    async def _call(self, func: Callable[[], Any]) -> Any:
        async with self._lock:
            return await to_thread.run_sync(func)

    async def rows(self, sql: str, params: Sequence[Any]) -> list[dict[str, Any]]:
        return await self._call(lambda: [dict(r) for r in self._conn.execute(sql, params)])

    async def row(self, sql: str, params: Sequence[Any]) -> dict[str, Any] | None:
        def first() -> dict[str, Any] | None:
            found = self._conn.execute(sql, params).fetchone()
            return None if found is None else dict(found)

        return await self._call(first)

    async def execute(self, sql: str, params: Sequence[Any]) -> int:
        return await self._call(lambda: self._conn.execute(sql, params).rowcount)

    async def script(self, sql: str) -> None:
        await self._call(lambda: self._conn.executescript(sql))

    async def close(self) -> None:
        await self._call(self._conn.close)

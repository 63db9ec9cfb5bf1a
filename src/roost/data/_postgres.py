"""PostgreSQL driver on an ``asyncpg`` connection pool.

roost SQL is written with ``?`` placeholders; asyncpg wants ``$1, $2...``.
``number_placeholders`` rewrites them, leaving ``?`` inside quoted
literals and identifiers alone.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from roost.data.errors import DriverNotInstalledError

# A quoted literal, a quoted identifier, or a bare placeholder.
_TOKENS = re.compile(r"'(?:[^']|'')*'|\"(?:[^\"]|\"\")*\"|\?")


def number_placeholders(sql: str) -> str:
    """``a = ? AND b = '?'`` -> ``a = $1 AND b = '?'``."""
    count = 0

    def replace(match: re.Match[str]) -> str:
        nonlocal count
        if match.group() != "?":
            return match.group()
        count += 1
        return f"${count}"

    return _TOKENS.sub(replace, sql)


class PostgresDriver:
    __slots__ = ("_pool",)

    def __init__(self, pool: Any) -> None:
        self._pool = pool

    @classmethod
    async def open(cls, url: str, pool_size: int) -> PostgresDriver:
        try:
            import asyncpg
        except ImportError:
            msg = (
                "roost.data requires 'asyncpg' for PostgreSQL databases. "
                "Install it with: pip install roost[data-pg]"
            )
            raise DriverNotInstalledError(msg) from None
        return cls(await asyncpg.create_pool(url, min_size=1, max_size=pool_size))

    async def rows(self, sql: str, params: Sequence[Any]) -> list[dict[str, Any]]:
        return [dict(record) for record in await self._pool.fetch(sql, *params)]

    async def row(self, sql: str, params: Sequence[Any]) -> dict[str, Any] | None:
        record = await self._pool.fetchrow(sql, *params)
        return None if record is None else dict(record)

    async def execute(self, sql: str, params: Sequence[Any]) -> int:
        # Status strings look like "DELETE 3" or "INSERT 0 1".
        status = await self._pool.execute(sql, *params)
        tail = status.rsplit(" ", 1)[-1]
        return int(tail) if tail.isdigit() else 0

    async def script(self, sql: str) -> None:
        await self._pool.execute(sql)

    async def close(self) -> None:
        await self._pool.close()

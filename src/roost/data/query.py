"""Frozen SELECT builder.

Relationships hand these out already filtered by the parent
(``HasMany.query(post)``); route model binding adds the lookup key with
one more ``where`` and runs it through ``fetch_one``::

    recent = await (
        Query(Comment, "comments")
        .where("post_id = ?", post.id)
        .where_if(author, "author = ?", author)
        .order_by("id DESC")
        .take(20)
        .fetch(db)
    )

``sql`` and ``params`` are exactly what gets sent to the database.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from roost.data.database import Database


@dataclass(frozen=True, slots=True)
class Query[T]:
    model: type[T]
    table: str
    columns: str = "*"
    conditions: tuple[str, ...] = ()
    params: tuple[object, ...] = ()
    ordering: str | None = None
    limit: int | None = None
    offset: int | None = None

    def where(self, condition: str, /, *params: object) -> Query[T]:
        """AND *condition* onto the query; its ``?`` take *params* in order."""
        return replace(self, conditions=(*self.conditions, condition), params=self.params + params)

    def where_if(self, flag: object, condition: str, /, *params: object) -> Query[T]:
        return self.where(condition, *params) if flag else self

    def order_by(self, ordering: str) -> Query[T]:
        return replace(self, ordering=ordering)

    def take(self, n: int) -> Query[T]:
        return replace(self, limit=n)

    def skip(self, n: int) -> Query[T]:
        return replace(self, offset=n)

    def select(self, columns: str) -> Query[T]:
        return replace(self, columns=columns)

    def _from(self) -> str:
        sql = f"FROM {self.table}"
        if self.conditions:
            sql += " WHERE " + " AND ".join(self.conditions)
        return sql

    @property
    def sql(self) -> str:
        parts = [f"SELECT {self.columns}", self._from()]
        if self.ordering:
            parts.append(f"ORDER BY {self.ordering}")
        if self.limit is not None:
            parts.append(f"LIMIT {self.limit}")
        if self.offset is not None:
            parts.append(f"OFFSET {self.offset}")
        return " ".join(parts)

    async def fetch(self, db: Database) -> list[T]:
        return await db.fetch(self.model, self.sql, *self.params)

    async def fetch_one(self, db: Database) -> T | None:
        return await db.fetch_one(self.model, self.sql, *self.params)

    async def count(self, db: Database) -> int:
        """Rows matching the conditions; ordering and paging are ignored."""
        return int(await db.fetch_val(f"SELECT COUNT(*) {self._from()}", *self.params) or 0)

    async def exists(self, db: Database) -> bool:
        return await db.fetch_val(f"SELECT 1 {self._from()} LIMIT 1", *self.params) is not None

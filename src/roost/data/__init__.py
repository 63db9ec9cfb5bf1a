"""Typed async database access for roost.

SQL in, dataclasses out. Not an ORM.

Basic usage::

    from roost.data import Database, table

    @table("posts")
    @dataclass(frozen=True, slots=True)
    class Post:
        id: int
        title: str

    db = Database("sqlite:///app.db")
    post = await db.fetch_one(Post, "SELECT * FROM posts WHERE id = ?", 42)
    same = await query_for(Post).where("id = ?", 42).fetch_one(db)

SQLite works out of the box (stdlib ``sqlite3`` on anyio worker threads).
PostgreSQL requires ``asyncpg``::

    pip install roost[data-pg]
"""

from roost.data.database import Database
from roost.data.errors import DataError, DriverNotInstalledError, QueryError
from roost.data.model import (
    BelongsTo,
    HasMany,
    HasOne,
    ModelMeta,
    is_model,
    model_meta,
    query_for,
    route_key_of,
    table,
)
from roost.data.query import Query

__all__ = [
    "BelongsTo",
    "DataError",
    "Database",
    "DriverNotInstalledError",
    "HasMany",
    "HasOne",
    "ModelMeta",
    "Query",
    "QueryError",
    "is_model",
    "model_meta",
    "query_for",
    "route_key_of",
    "table",
]

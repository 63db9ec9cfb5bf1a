"""Table metadata and relationships for dataclass models.

Not an ORM: a model is still a plain dataclass and SQL stays visible.
``@table`` only records where the rows live and how models relate, so
route model binding (and your own code) can build ``Query`` objects::

    @table("posts", relations={"comments": HasMany(lambda: Comment, "post_id")})
    @dataclass(frozen=True, slots=True)
    class Post:
        id: int
        slug: str
        title: str

        route_key: ClassVar[str] = "slug"   # optional: default lookup key

    @table("comments", relations={"post": BelongsTo(Post, "post_id")})
    @dataclass(frozen=True, slots=True)
    class Comment:
        id: int
        post_id: int
        body: str

    comments = await HasMany(Comment, "post_id").query(post).fetch(db)

Relationship targets may be given lazily (``lambda: Comment``) so models
can reference classes defined later in the module.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from roost.data._mapping import field_names
from roost.data.query import Query
from roost.errors import ConfigurationError

_META_ATTR = "__roost_table__"

type ModelRef = type | Callable[[], type]


def _deref(target: ModelRef) -> type:
    if isinstance(target, type):
        return target
    return target()


@dataclass(frozen=True, slots=True)
class HasMany:
    """Parent owns many target rows; ``foreign_key`` lives on the target."""

    target: ModelRef
    foreign_key: str
    local_key: str = "id"

    @property
    def model(self) -> type:
        return _deref(self.target)

    def query(self, parent: Any) -> Query[Any]:
        """Rows of the target belonging to *parent*."""
        model = self.model
        return query_for(model).where(f"{self.foreign_key} = ?", getattr(parent, self.local_key))

    def check(self, owner: type) -> None:
        """Validate column names against both dataclasses."""
        _require_field(owner, self.local_key, "local_key")
        _require_field(self.model, self.foreign_key, "foreign_key")


@dataclass(frozen=True, slots=True)
class HasOne(HasMany):
    """Parent owns at most one target row; queried like ``HasMany``."""


@dataclass(frozen=True, slots=True)
class BelongsTo:
    """Parent row points at one target row; ``foreign_key`` lives on the parent."""

    target: ModelRef
    foreign_key: str
    owner_key: str = "id"

    @property
    def model(self) -> type:
        return _deref(self.target)

    def query(self, parent: Any) -> Query[Any]:
        """The target row *parent* points at."""
        model = self.model
        return query_for(model).where(f"{self.owner_key} = ?", getattr(parent, self.foreign_key))

    def check(self, owner: type) -> None:
        _require_field(owner, self.foreign_key, "foreign_key")
        _require_field(self.model, self.owner_key, "owner_key")


type Relation = HasMany | HasOne | BelongsTo


@dataclass(frozen=True, slots=True)
class ModelMeta:
    """What ``@table`` recorded about a model class."""

    model: type
    table: str
    primary_key: str = "id"
    route_key: str | None = None
    relations: Mapping[str, Relation] = field(default_factory=dict)


def _require_field(model: type, name: str, role: str) -> None:
    if name not in field_names(model):
        msg = f"{model.__name__} has no field {name!r} (used as {role})."
        raise ConfigurationError(msg)


def table(
    name: str,
    *,
    primary_key: str = "id",
    route_key: str | None = None,
    relations: Mapping[str, Relation] | None = None,
) -> Callable[[type], type]:
    """Class decorator registering a dataclass as a table-backed model.

    Apply it *outside* ``@dataclass`` so the class is already a dataclass
    (and, with ``slots=True``, already the final class object).

    ``route_key`` is the column a bare ``:param`` is looked up by; it
    defaults to the primary key.
    """

    def decorator(cls: type) -> type:
        _require_field(cls, primary_key, "primary_key")
        if route_key is not None:
            _require_field(cls, route_key, "route_key")
        meta = ModelMeta(
            model=cls,
            table=name,
            primary_key=primary_key,
            route_key=route_key,
            relations=MappingProxyType(dict(relations or {})),
        )
        setattr(cls, _META_ATTR, meta)
        return cls

    return decorator


def is_model(cls: Any) -> bool:
    """Whether *cls* was registered with ``@table``."""
    meta = getattr(cls, _META_ATTR, None) if isinstance(cls, type) else None
    return isinstance(meta, ModelMeta) and meta.model is cls


def model_meta(cls: type) -> ModelMeta:
    """Return the ``@table`` metadata of *cls*.

    Raises ``ConfigurationError`` if the class isn't a registered model.
    """
    meta = getattr(cls, _META_ATTR, None)
    if not isinstance(meta, ModelMeta) or meta.model is not cls:
        msg = f"{getattr(cls, '__name__', cls)!r} is not a model. Decorate it with @table(...)."
        raise ConfigurationError(msg)
    return meta


def query_for[T](cls: type[T]) -> Query[T]:
    """A fresh ``Query`` over the model's table."""
    return Query(cls, model_meta(cls).table)


def route_key_of(cls: type) -> str:
    """The model's default lookup column for route binding.

    A class-level ``route_key`` attribute wins, then ``@table(route_key=...)``,
    then the primary key.
    """
    key = getattr(cls, "route_key", None)
    if isinstance(key, str) and key:
        return key
    meta = model_meta(cls)
    return meta.route_key or meta.primary_key

"""Lookup strategy resolver — turns one path value into one model instance.

Strategies, first applicable wins:

1. **Model override** — the model class defines ``find_for_request``
   as a classmethod or staticmethod::

       @classmethod
       async def find_for_request(cls, request, param, value): ...

2. **Relationship override** — the param is scoped and the *parent
   instance* defines ``find_related_for_request``::

       async def find_related_for_request(self, request, param, value): ...

3. **Default lookup** — ``WHERE <key> = value LIMIT 1`` against the
   model's table, or against the parent's relationship whose name
   matches the param (singular or plural) when the param is scoped.

Overrides may be sync or async. They receive the ``RouteParam`` as
parsed, so ``param.lookup_key`` may be ``DEFAULT_KEY``; call
``resolve_lookup_key(model, param)`` to get the real column. Returning
``None`` (or raising ``NotFound``) means not found.

When several rows share the key, the first row the store returns wins.
Keys are expected to be unique; no ambiguity error is raised.
"""

import inspect
import logging
from typing import Any

from roost._internal.invoke import invoke
from roost._internal.naming import camelize, name_variants
from roost.binding.matcher import PendingBinding
from roost.data._mapping import coerce_field, field_names
from roost.data.database import Database
from roost.data.model import Relation, model_meta, query_for, route_key_of
from roost.data.query import Query
from roost.errors import ConfigurationError, ModelNotFound
from roost.http.request import Request
from roost.routing.params import RouteParam

logger = logging.getLogger("roost.binding")


def resolve_lookup_key(model: type, param: RouteParam) -> str:
    """The column a param is matched against on *model*.

    ``DEFAULT_KEY`` becomes the model's ``route_key`` (or primary key).
    Raises ``ConfigurationError`` if the column isn't a model field.
    """
    key = route_key_of(model) if param.has_default_key else param.lookup_key
    assert isinstance(key, str)
    if key not in field_names(model):
        msg = (
            f"Lookup key {key!r} for route parameter {param.literal!r} "
            f"is not a field of {model.__name__}."
        )
        raise ConfigurationError(msg)
    return key


def model_finder(model: type) -> Any:
    """The model-level ``find_for_request`` override, or ``None``.

    Must be a classmethod or staticmethod; a plain instance method on the
    class can't be called without an instance.
    """
    raw = inspect.getattr_static(model, "find_for_request", None)
    if raw is None:
        return None
    if not isinstance(raw, (classmethod, staticmethod)):
        msg = f"{model.__name__}.find_for_request must be a classmethod or staticmethod."
        raise ConfigurationError(msg)
    return getattr(model, "find_for_request")


def related_finder(parent: Any) -> Any:
    """The parent instance's ``find_related_for_request`` override, or ``None``."""
    finder = getattr(parent, "find_related_for_request", None)
    return finder if callable(finder) else None


def find_relation(owner: type, param: RouteParam, child: type) -> Relation:
    """The relationship on *owner* that a scoped *param* names.

    Tries the param name as written, then its singular and plural forms,
    against each declared relationship name (also camelCased).

    Raises ``ConfigurationError`` when nothing matches or when the match
    targets a different model than the slot expects.
    """
    relations = {camelize(name): relation for name, relation in model_meta(owner).relations.items()}
    candidates = name_variants(param.name)
    for candidate in candidates:
        relation = relations.get(candidate)
        if relation is None:
            continue
        if relation.model is not child:
            msg = (
                f"{owner.__name__}.{candidate} targets {relation.model.__name__}, but "
                f"route parameter {param.literal!r} is bound to {child.__name__}."
            )
            raise ConfigurationError(msg)
        return relation

    msg = (
        f"{owner.__name__} has no relationship named "
        f"{' or '.join(repr(c) for c in candidates)} for scoped route parameter "
        f"{param.literal!r}. Declare it in @table(relations=...) or define "
        f"find_related_for_request on {owner.__name__}."
    )
    raise ConfigurationError(msg)


class LookupResolver:
    """Resolves pending bindings against a database.

    Stateless apart from the database reference; one instance serves all
    requests.
    """

    __slots__ = ("_db",)

    def __init__(self, db: Database | None) -> None:
        self._db = db

    async def resolve(
        self,
        request: Request,
        binding: PendingBinding,
        parent: Any = None,
    ) -> Any:
        """Return the instance for *binding*, or raise ``ModelNotFound``.

        *parent* is the instance resolved for the preceding slot; it is
        only consulted when the param is scoped.
        """
        model = binding.slot.target
        param = binding.param
        value = binding.value

        finder = model_finder(model)
        if finder is not None:
            logger.debug("%s: model override %s.find_for_request", param.literal, model.__name__)
            return _found(await invoke(finder, request, param, value), model, param, value)

        if param.scoped:
            if parent is None:
                msg = f"Scoped route parameter {param.literal!r} has no resolved parent."
                raise ConfigurationError(msg)
            related = related_finder(parent)
            if related is not None:
                logger.debug(
                    "%s: relationship override %s.find_related_for_request",
                    param.literal,
                    type(parent).__name__,
                )
                return _found(await invoke(related, request, param, value), model, param, value)
            query: Query[Any] = find_relation(type(parent), param, model).query(parent)
            logger.debug("%s: scoped lookup through %s", param.literal, type(parent).__name__)
        else:
            query = query_for(model)
            logger.debug("%s: default lookup on %s", param.literal, model_meta(model).table)

        return await self._lookup(query, model, param, value)

    async def _lookup(self, query: Query[Any], model: type, param: RouteParam, value: str) -> Any:
        key = resolve_lookup_key(model, param)
        if self._db is None:
            msg = (
                f"Route parameter {param.literal!r} needs a database lookup on "
                f"{model.__name__}, but no database is configured. Pass db= to App()."
            )
            raise ConfigurationError(msg)

        try:
            coerced = coerce_field(model, key, value)
        except ValueError:
            # A value that can't be the key's type can't match any row.
            raise ModelNotFound(model, key, value) from None

        instance = await query.where(f"{key} = ?", coerced).take(1).fetch_one(self._db)
        if instance is None:
            raise ModelNotFound(model, key, value)
        return instance


def _found(instance: Any, model: type, param: RouteParam, value: str) -> Any:
    """Turn an override's ``None`` into ``ModelNotFound``."""
    if instance is None:
        key = param.lookup_key if isinstance(param.lookup_key, str) else route_key_of(model)
        raise ModelNotFound(model, key, value)
    return instance

"""Route parameter tokens and their parsed descriptors.

A route path is a sequence of ``/``-separated segments. Segments that
start with ``:`` are parameters; every other segment is static. Four
parameter forms are accepted::

    :post              bound by the model's default key
    :post(slug)        bound by an explicit lookup key
    :>comment          scoped: looked up through the previous param's model
    :>comment(code)    scoped, with an explicit lookup key

Parsing happens once, when a route is added to the router. Malformed
tokens raise ``ConfigurationError`` at that point, never per request.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Final

from roost._internal.naming import camelize
from roost.errors import ConfigurationError


class _DefaultKey:
    """Sentinel for "use the model's configured route key"."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "DEFAULT_KEY"

    def __reduce__(self) -> str:
        return "DEFAULT_KEY"


DEFAULT_KEY: Final = _DefaultKey()

_TOKEN = re.compile(
    r"""
    ^:
    (?P<scope>>)?
    (?P<name>[^()]*)
    (?:\((?P<key>[^()]*)\))?
    $
    """,
    re.VERBOSE,
)
_NAME = re.compile(r"^[A-Za-z0-9_\-]+$")
_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True, slots=True)
class RouteParam:
    """A parsed route parameter.

    Attributes:
        name: camelCase identifier (``post_comments`` -> ``postComments``).
        literal: The token exactly as written, e.g. ``":>comment(code)"``.
        scoped: True when the ``>`` breadcrumb marker is present.
        lookup_key: Explicit column name, or ``DEFAULT_KEY``.
        parent_name: Name of the preceding param; only set when scoped.
    """

    name: str
    literal: str
    scoped: bool = False
    lookup_key: str | _DefaultKey = DEFAULT_KEY
    parent_name: str | None = None

    @property
    def has_default_key(self) -> bool:
        return self.lookup_key is DEFAULT_KEY


def is_param_token(segment: str) -> bool:
    """Whether a path segment is a parameter (``:name`` form)."""
    return segment.startswith(":")


def parse_param(token: str) -> RouteParam:
    """Parse a single ``:name`` style token into a ``RouteParam``.

    ``parent_name`` is left unset; ``parse_params`` fills it in because
    only the full list knows which param precedes which.

    Raises ``ConfigurationError`` for malformed tokens.
    """
    match = _TOKEN.match(token)
    if match is None:
        msg = (
            f"Malformed route parameter {token!r}. "
            "Expected :name, :name(key), :>name, or :>name(key)."
        )
        raise ConfigurationError(msg)

    raw_name = match.group("name")
    if not raw_name:
        msg = f"Route parameter {token!r} has an empty name."
        raise ConfigurationError(msg)
    if not _NAME.match(raw_name):
        msg = (
            f"Route parameter {token!r} has an invalid name {raw_name!r}. "
            "Use letters, digits, '_' or '-'."
        )
        raise ConfigurationError(msg)
    name = camelize(raw_name)
    if not name:
        msg = f"Route parameter {token!r} has an empty name."
        raise ConfigurationError(msg)

    key = match.group("key")
    lookup_key: str | _DefaultKey = DEFAULT_KEY
    if key is not None:
        if not _KEY.match(key):
            msg = (
                f"Route parameter {token!r} has an invalid lookup key {key!r}. "
                "Lookup keys must be column identifiers."
            )
            raise ConfigurationError(msg)
        lookup_key = key

    return RouteParam(
        name=name,
        literal=token,
        scoped=match.group("scope") is not None,
        lookup_key=lookup_key,
    )


def parse_params(tokens: Iterable[str], *, path: str = "") -> tuple[RouteParam, ...]:
    """Parse every parameter token of one route, in path order.

    Links scoped params to their parent and enforces the whole-route
    rules: no breadcrumb on the first param, no duplicate names.
    """
    where = f" in route {path!r}" if path else ""
    params: list[RouteParam] = []
    seen: set[str] = set()
    for token in tokens:
        param = parse_param(token)
        if param.name in seen:
            msg = f"Duplicate route parameter {param.name!r}{where}."
            raise ConfigurationError(msg)
        seen.add(param.name)

        if param.scoped:
            if not params:
                msg = (
                    f"Scoped parameter {token!r}{where} has no preceding "
                    "parameter to scope to. Remove the '>' marker."
                )
                raise ConfigurationError(msg)
            param = replace(param, parent_name=params[-1].name)
        params.append(param)
    return tuple(params)

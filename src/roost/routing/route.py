"""Routes, their path segments, and what a successful match returns."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from roost.routing.params import RouteParam, is_param_token, parse_params


@dataclass(frozen=True, slots=True)
class PathSegment:
    """``value`` is the raw text between slashes; ``param`` is set for ``:`` tokens."""

    value: str
    param: RouteParam | None = None

    @property
    def is_param(self) -> bool:
        return self.param is not None


def parse_path(path: str) -> list[PathSegment]:
    """Split *path* on ``/`` and parse its parameter tokens.

    Parameters are parsed together so a ``:>`` token learns its parent;
    ``ConfigurationError`` names *path* when a token is malformed.
    """
    parts = [part for part in path.split("/") if part]
    params = iter(parse_params([p for p in parts if is_param_token(p)], path=path))
    return [PathSegment(part, next(params) if is_param_token(part) else None) for part in parts]


@dataclass(frozen=True, slots=True)
class Route:
    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None
    # Path order, which is also the order of the values a match captures.
    params: tuple[RouteParam, ...] = field(init=False, default=())

    def __post_init__(self) -> None:
        params = tuple(seg.param for seg in parse_path(self.path) if seg.param is not None)
        object.__setattr__(self, "params", params)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    route: Route
    path_params: dict[str, str]

    @property
    def values(self) -> tuple[str, ...]:
        """Raw path values, positionally aligned with ``route.params``."""
        return tuple(self.path_params.values())

"""Path patterns, their parameter tokens, and the router that matches them."""

from roost.routing.params import DEFAULT_KEY, RouteParam, parse_param, parse_params
from roost.routing.route import PathSegment, Route, RouteMatch, parse_path
from roost.routing.router import Router

__all__ = [
    "DEFAULT_KEY",
    "PathSegment",
    "Route",
    "RouteMatch",
    "RouteParam",
    "Router",
    "parse_param",
    "parse_params",
    "parse_path",
]

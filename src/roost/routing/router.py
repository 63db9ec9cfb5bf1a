"""Segment trie mapping request paths to routes.

Every ``:param`` at the same depth shares one edge and values are
captured by position, so the parameter names always come from whichever
route the method picks, never from the trie.
"""

from roost.errors import MethodNotAllowed, NotFound
from roost.routing.route import Route, RouteMatch, parse_path


class _Node:
    __slots__ = ("by_method", "param", "static")

    def __init__(self) -> None:
        self.static: dict[str, _Node] = {}
        self.param: _Node | None = None
        self.by_method: dict[str, Route] = {}


class Router:
    """Built up with ``add()``, then ``compile()`` closes it for matching.

    Static segments beat parameters; when a static branch dead-ends the
    parameter branch at the same depth is tried.
    """

    __slots__ = ("_compiled", "_root", "_routes")

    def __init__(self) -> None:
        self._root = _Node()
        self._routes: list[Route] = []
        self._compiled = False

    @property
    def routes(self) -> list[Route]:
        """Registered routes in registration order."""
        return list(self._routes)

    def add(self, route: Route) -> None:
        if self._compiled:
            msg = f"Router is compiled; cannot add {route.path!r}."
            raise RuntimeError(msg)
        node = self._root
        for segment in parse_path(route.path):
            if segment.is_param:
                node.param = node.param or _Node()
                node = node.param
            else:
                node = node.static.setdefault(segment.value, _Node())
        node.by_method.update(dict.fromkeys(route.methods, route))
        self._routes.append(route)

    def compile(self) -> None:
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Raises ``NotFound`` or, when only the method is wrong, ``MethodNotAllowed``."""
        parts = [part for part in path.split("/") if part]
        found = _walk(self._root, parts, ())
        if found is None:
            raise NotFound(f"No route matches {method} {path!r}")

        node, values = found
        route = node.by_method.get(method)
        if route is None:
            raise MethodNotAllowed(frozenset(node.by_method))
        return RouteMatch(route, dict(zip((p.name for p in route.params), values, strict=True)))


def _walk(
    node: _Node, parts: list[str], values: tuple[str, ...]
) -> tuple[_Node, tuple[str, ...]] | None:
    if not parts:
        return (node, values) if node.by_method else None
    head, rest = parts[0], parts[1:]
    child = node.static.get(head)
    if child is not None and (found := _walk(child, rest, values)) is not None:
        return found
    if node.param is not None:
        return _walk(node.param, rest, (*values, head))
    return None

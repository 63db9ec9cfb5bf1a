"""The request object handlers and middleware receive.

Requests are frozen. Routing and binding each derive a new one:
``with_match()`` attaches the route and its raw path values,
``with_bound_args()`` attaches what the binding middleware resolved.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from roost._internal.asgi import Receive, Scope
from roost.http.multimap import Headers, QueryParams

if TYPE_CHECKING:
    from roost.routing.route import Route, RouteMatch


@dataclass(frozen=True, slots=True)
class Request:
    """``bound_args`` is ``None`` for handlers without bindings, otherwise
    one resolved value per slot, in slot order.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    _receive: Receive = field(repr=False, compare=False)
    path_params: dict[str, str] = field(default_factory=dict)
    route: Route | None = None
    bound_args: tuple[Any, ...] | None = None
    # Shared between derived copies so the body is read from ASGI only once.
    _body: list[bytes] = field(default_factory=list, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query=QueryParams(scope.get("query_string", b"")),
            _receive=receive,
        )

    def with_match(self, match: RouteMatch) -> Request:
        return replace(self, route=match.route, path_params=match.path_params)

    def with_bound_args(self, args: tuple[Any, ...]) -> Request:
        return replace(self, bound_args=args)

    async def body(self) -> bytes:
        if not self._body:
            chunks = []
            more = True
            while more:
                message = await self._receive()
                chunks.append(message.get("body", b""))
                more = message.get("more_body", False)
            self._body.append(b"".join(chunks))
        return self._body[0]

    async def text(self) -> str:
        return (await self.body()).decode("utf-8")

    async def json(self) -> Any:
        return json.loads(await self.body())

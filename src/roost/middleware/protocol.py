"""What the app accepts as middleware.

Routing happens first, so every middleware sees ``request.route`` (the
matched ``Route``, or ``None`` when the request will end in 404/405).
Route binding is itself a middleware, always the innermost one: by the
time yours runs, bound path values are still raw strings.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from roost.http.request import Request
from roost.http.response import Response

type Next = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """``async (request, next) -> Response``; plain functions qualify::

        async def tenant_header(request: Request, next: Next) -> Response:
            response = await next(request)
            return response.with_header("X-Tenant", request.headers.get("host", ""))
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...

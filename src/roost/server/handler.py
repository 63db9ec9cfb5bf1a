"""One HTTP request from ASGI scope to ASGI send.

Order: build the ``Request``, route it, run the middleware chain (binding
innermost), call the handler, negotiate, send. A routing miss is raised
from inside the chain rather than up front, so middleware still wraps
404 and 405 responses.
"""

import inspect
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from roost._internal.asgi import Receive, Scope, Send
from roost._internal.invoke import invoke
from roost._internal.types import ErrorHandler
from roost.errors import HTTPError
from roost.http.request import Request
from roost.http.response import Response
from roost.middleware.protocol import Next
from roost.routing.router import Router
from roost.server.errors import error_response
from roost.server.negotiation import negotiate


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: Sequence[Callable[..., Any]],
    error_handlers: Mapping[int | type, ErrorHandler],
    debug: bool,
) -> None:
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    miss: HTTPError | None = None
    try:
        request = request.with_match(router.match(request.method, request.path))
    except HTTPError as exc:
        miss = exc

    async def endpoint(req: Request) -> Response:
        if miss is not None:
            raise miss
        return await call_handler(req)

    chain: Next = endpoint
    for mw in reversed(middleware):
        chain = _link(mw, chain)

    try:
        response = await chain(request)
    except Exception as exc:
        response = await error_response(exc, request, error_handlers, debug=debug)
    await _send(response, send)


def _link(mw: Callable[..., Any], inner: Next) -> Next:
    async def step(req: Request) -> Response:
        return await mw(req, inner)

    return step


async def call_handler(request: Request) -> Response:
    """``handler(request, *bound_args)`` when bound, else by signature."""
    assert request.route is not None
    handler = request.route.handler
    if request.bound_args is not None:
        return negotiate(await invoke(handler, request, *request.bound_args))
    return negotiate(await invoke(handler, **_kwargs_for(handler, request)))


def _kwargs_for(handler: Callable[..., Any], request: Request) -> dict[str, Any]:
    # A parameter named ``request`` (or annotated Request) gets the request;
    # one named after a path parameter gets its value, converted when
    # annotated int or float and the conversion succeeds.
    kwargs: dict[str, Any] = {}
    for name, param in inspect.signature(handler, eval_str=True).parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
            continue
        if name not in request.path_params:
            continue
        value: Any = request.path_params[name]
        if param.annotation in (int, float):
            try:
                value = param.annotation(value)
            except ValueError:
                pass
        kwargs[name] = value
    return kwargs


async def _send(response: Response, send: Send) -> None:
    # 1xx, 204 and 304 carry no body.
    bodyless = response.status < 200 or response.status in (204, 304)
    body = b"" if bodyless else response.body_bytes
    headers = [(b"content-type", response.content_type.encode("latin-1"))]
    headers += [(n.lower().encode("latin-1"), v.encode("latin-1")) for n, v in response.headers]
    headers.append((b"content-length", str(len(body)).encode("latin-1")))
    await send({"type": "http.response.start", "status": response.status, "headers": headers})
    await send({"type": "http.response.body", "body": body})

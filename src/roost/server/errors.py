"""Turn exceptions escaping the middleware chain into responses.

``HTTPError`` keeps its own status and is logged at DEBUG; that covers
``ModelNotFound`` from binding. Anything else, a binding
``ConfigurationError`` included, is a 500 logged with its traceback.
A registered ``@app.error()`` handler gets the first say in both cases.
"""

import inspect
import logging
from collections.abc import Mapping

from roost._internal.invoke import invoke
from roost._internal.types import ErrorHandler
from roost.errors import HTTPError
from roost.http.request import Request
from roost.http.response import Response
from roost.server.negotiation import negotiate

logger = logging.getLogger("roost.server")

_PLAIN = "text/plain; charset=utf-8"


def find_error_handler(
    handlers: Mapping[int | type, ErrorHandler], exc: Exception, status: int
) -> ErrorHandler | None:
    """Closest exception class in the MRO wins; the status code is the fallback."""
    for cls in type(exc).__mro__:
        if cls in handlers:
            return handlers[cls]
    return handlers.get(status)


async def error_response(
    exc: Exception,
    request: Request,
    handlers: Mapping[int | type, ErrorHandler],
    *,
    debug: bool = False,
) -> Response:
    if isinstance(exc, HTTPError):
        status = exc.status
        logger.debug("%d %s %s: %s", status, request.method, request.path, exc.detail)
    else:
        status = 500
        logger.exception("500 %s %s", request.method, request.path)

    handler = find_error_handler(handlers, exc, status)
    if handler is not None:
        # Handlers take (), (request) or (request, exc).
        arity = len(inspect.signature(handler).parameters)
        response = negotiate(await invoke(handler, *(request, exc)[:arity]))
        return response.with_status(status) if response.status == 200 else response

    if isinstance(exc, HTTPError):
        body = exc.detail or f"Error {status}"
        if debug and exc.detail:
            body = str(exc)
        return Response(body, status, _PLAIN, exc.headers)
    body = "Internal Server Error"
    if debug:
        body += f"\n\n{type(exc).__name__}: {exc}"
    return Response(body, status, _PLAIN)

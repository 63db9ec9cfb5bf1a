"""Route model binding middleware.

For a request whose handler has registered bindings, resolves every
route parameter into its bound value before the handler runs::

    @app.route("/posts/:post/comments/:>comment", bind=(Post, Comment))
    async def show(request, post, comment): ...

Per request the flow is::

    Matched -> Resolving(0) -> Resolving(1) -> ... -> Resolved
                     \\______________\\____________-> NotFound | ConfigError

Slots are resolved strictly left to right, one awaited lookup at a time:
a scoped slot needs its parent's instance before it can query. The first
failure stops resolution and the handler is never called.

- Not found: ``ModelNotFound`` (404) goes through the normal error
  handler chain.
- Wiring mistakes: ``ConfigurationError`` is logged on ``roost.binding``
  and re-raised; the server turns it into a 500.
- Store failures (``QueryError``) propagate untouched.
"""

import logging
from typing import Any

from roost.binding.matcher import match_bindings
from roost.binding.registry import BindingRegistry
from roost.binding.resolver import LookupResolver
from roost.binding.slots import BindingSlot
from roost.data.database import Database
from roost.errors import ConfigurationError
from roost.http.request import Request
from roost.http.response import Response
from roost.middleware.protocol import Next
from roost.routing.route import Route

logger = logging.getLogger("roost.binding")


class BindingMiddleware:
    """Resolves bound route parameters and hands them to the handler.

    Requests without a matched route, or whose handler isn't in the
    registry, pass through unchanged. Installed automatically by ``App``
    as the innermost middleware when any binding is registered, so user
    middleware (auth, CORS) runs before any lookup happens.
    """

    __slots__ = ("_registry", "_resolver")

    def __init__(self, registry: BindingRegistry, db: Database | None = None) -> None:
        self._registry = registry
        self._resolver = LookupResolver(db)

    async def __call__(self, request: Request, next: Next) -> Response:
        route = request.route
        if route is None:
            return await next(request)

        slots = self._registry.lookup(route.handler)
        if slots is None:
            return await next(request)

        try:
            args = await self.resolve(request, route, slots)
        except ConfigurationError:
            logger.error(
                "Binding configuration error: %s %s -> %s",
                request.method,
                route.path,
                getattr(route.handler, "__qualname__", route.handler),
            )
            raise

        return await next(request.with_bound_args(args))

    async def resolve(
        self,
        request: Request,
        route: Route,
        slots: tuple[BindingSlot, ...],
    ) -> tuple[Any, ...]:
        """Resolve every slot of *route* for *request*, in order."""
        try:
            values = [request.path_params[param.name] for param in route.params]
        except KeyError as exc:
            msg = f"Route {route.path!r} matched without a value for parameter {exc.args[0]!r}."
            raise ConfigurationError(msg) from None

        bindings = match_bindings(route.params, values, slots, path=route.path)

        # Sequential on purpose: bindings[i] may scope to bindings[i - 1].
        for index, binding in enumerate(bindings):
            if binding.is_resolved:
                continue
            parent = bindings[index - 1].resolved if binding.param.scoped else None
            binding.resolved = await self._resolver.resolve(request, binding, parent)

        return tuple(binding.resolved for binding in bindings)

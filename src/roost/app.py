"""The ``App``: register routes, bindings and middleware, then serve.

Registration is open until the app freezes (first request, ``startup()``
or ``run()``). Freezing compiles the router, locks the binding registry,
validates every bound route and appends ``BindingMiddleware`` innermost.
"""

import logging
import threading
from collections.abc import Callable, Sequence
from typing import Any

from roost._internal.asgi import Receive, Scope, Send
from roost._internal.invoke import invoke
from roost._internal.types import ErrorHandler, Handler
from roost.binding.check import BindingIssue, check_bindings, raise_for_issues
from roost.binding.middleware import BindingMiddleware
from roost.binding.registry import BindingRegistry
from roost.config import AppConfig
from roost.data.database import Database
from roost.middleware.protocol import Middleware
from roost.routing.route import Route, parse_path
from roost.routing.router import Router
from roost.server.handler import handle_request

logger = logging.getLogger("roost.server")

type Hook = Callable[[], Any]


class App:
    """An ASGI application with route model binding::

        app = App(db="sqlite:///blog.db")

        @app.route("/posts/:post/comments/:>comment", bind=(Post, Comment))
        async def show(request, post, comment):
            return comment

    Freezing happens once, under a lock, even if several server threads
    deliver their first request together.
    """

    __slots__ = (
        "_bindings",
        "_db",
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_pending_routes",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(
        self, config: AppConfig | None = None, *, db: Database | str | None = None
    ) -> None:
        self.config = config or AppConfig()
        if isinstance(db, str):
            db = Database(db, pool_size=self.config.db_pool_size, echo=self.config.db_echo)
        self._db: Database | None = db
        self._bindings = BindingRegistry()
        self._pending_routes: list[Route] = []
        self._middleware_list: list[Middleware] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._startup_hooks: list[Hook] = []
        self._shutdown_hooks: list[Hook] = []
        self._frozen = False
        self._freeze_lock = threading.Lock()
        self._router: Router | None = None
        self._middleware: tuple[Callable[..., Any], ...] = ()

    # -- Setup --

    def route(
        self,
        path: str,
        *,
        methods: Sequence[str] = ("GET",),
        name: str | None = None,
        bind: Sequence[Any] | None = None,
    ) -> Callable[[Handler], Handler]:
        """Decorator registering *path* for *methods*.

        *path* may hold ``:name``, ``:name(key)``, ``:>name`` and
        ``:>name(key)`` parameters; a malformed one raises
        ``ConfigurationError`` right here. With *bind*, one target per
        parameter (a ``@table`` model or ``Raw``), the handler is called
        as ``handler(request, *bound_values)``.
        """
        allowed = frozenset(m.upper() for m in methods)
        parse_path(path)

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            if bind is not None:
                self._bindings.bind(func, *bind)
            self._pending_routes.append(Route(path, func, allowed, name))
            return func

        return decorator

    def error(
        self, code_or_exception: int | type[Exception]
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """``@app.error(404)`` also receives ``ModelNotFound``.

        ``@app.error(ModelNotFound)`` receives only binding misses.
        """

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    def add_middleware(self, middleware: Middleware) -> None:
        """Middleware added here always wraps route model binding."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    def on_startup(self, func: Hook) -> Hook:
        """Run *func* (sync or async) at startup, after the database connects."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Hook) -> Hook:
        """Run *func* (sync or async) at shutdown, before the database disconnects."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    @property
    def bindings(self) -> BindingRegistry:
        """Handler -> slots registry; ``app.bindings.bind(show, Post)`` works too."""
        return self._bindings

    @property
    def db(self) -> Database:
        if self._db is None:
            msg = "No database configured; pass db= to App()."
            raise RuntimeError(msg)
        return self._db

    @property
    def routes(self) -> list[Route]:
        return list(self._pending_routes)

    def check(self) -> list[BindingIssue]:
        """Binding problems across all routes, returned rather than raised."""
        return check_bindings(self._pending_routes, self._bindings)

    # -- Running --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve with pounce (``roost[server]``) until interrupted."""
        logging.getLogger("roost").setLevel(self.config.log_level.upper())
        self._ensure_frozen()

        from roost.server.dev import serve

        serve(self, self.config, host=host, port=port)

    async def startup(self) -> None:
        """Freeze, connect the database, run startup hooks.

        Binding problems raise here rather than on the first request.
        """
        self._ensure_frozen()
        if self._db is not None:
            await self._db.connect()
        for hook in self._startup_hooks:
            await invoke(hook)

    async def shutdown(self) -> None:
        for hook in self._shutdown_hooks:
            await invoke(hook)
        if self._db is not None:
            await self._db.disconnect()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return
        self._ensure_frozen()
        assert self._router is not None
        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._middleware,
            error_handlers=self._error_handlers,
            debug=self.config.debug,
        )

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Freezing --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if not self._frozen:
                self._freeze()

    def _freeze(self) -> None:
        # Caller holds _freeze_lock.
        router = Router()
        for route in self._pending_routes:
            router.add(route)
        router.compile()

        self._bindings.freeze()
        if self.config.validate_bindings:
            raise_for_issues(check_bindings(self._pending_routes, self._bindings))

        middleware: list[Callable[..., Any]] = list(self._middleware_list)
        if len(self._bindings):
            middleware.append(BindingMiddleware(self._bindings, self._db))
        self._middleware = tuple(middleware)
        self._router = router
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app once it is serving; "
                "register everything before the first request."
            )
            raise RuntimeError(msg)

"""Middleware types. ``BindingMiddleware`` lives in ``roost.binding``; the app adds it itself."""

from roost.middleware.protocol import Middleware, Next

__all__ = ["Middleware", "Next"]

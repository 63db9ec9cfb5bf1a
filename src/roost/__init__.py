"""Roost — ASGI routing with route model binding.

Path parameters resolve to model instances before the handler runs.

Basic usage::

    from roost import App, table

    app = App(db="sqlite:///blog.db")

    @app.route("/posts/:post(slug)/comments/:>comment", bind=(Post, Comment))
    async def show(request, post, comment):
        return comment

    app.run()

Parameter forms: ``:post`` (route key), ``:post(slug)`` (explicit column),
``:>comment`` (scoped to the previous parameter's model), and
``:>comment(code)`` (both).
"""

import importlib

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_KEY",
    "App",
    "AppConfig",
    "BelongsTo",
    "BindingRegistry",
    "ConfigurationError",
    "Database",
    "HTTPError",
    "HasMany",
    "HasOne",
    "MethodNotAllowed",
    "Middleware",
    "ModelNotFound",
    "Next",
    "NotFound",
    "Raw",
    "Redirect",
    "Request",
    "Response",
    "RoostError",
    "slots_for",
    "table",
]


# Public name -> defining module, imported on first access.
_LAZY = {
    "App": "roost.app",
    "AppConfig": "roost.config",
    "Request": "roost.http.request",
    "Response": "roost.http.response",
    "Redirect": "roost.http.response",
    "Middleware": "roost.middleware.protocol",
    "Next": "roost.middleware.protocol",
    "BindingRegistry": "roost.binding",
    "Raw": "roost.binding",
    "slots_for": "roost.binding",
    "Database": "roost.data",
    "table": "roost.data",
    "HasMany": "roost.data",
    "HasOne": "roost.data",
    "BelongsTo": "roost.data",
    "DEFAULT_KEY": "roost.routing.params",
    "RoostError": "roost.errors",
    "ConfigurationError": "roost.errors",
    "HTTPError": "roost.errors",
    "MethodNotAllowed": "roost.errors",
    "ModelNotFound": "roost.errors",
    "NotFound": "roost.errors",
}


def __getattr__(name: str) -> object:
    module = _LAZY.get(name)
    if module is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(importlib.import_module(module), name)

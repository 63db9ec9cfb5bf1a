"""Exceptions raised by routing, binding and the app.

``HTTPError`` and its subclasses become responses with their own status.
``ConfigurationError`` means the app was wired wrong: raised at setup or
freeze time, and turned into a 500 when it only shows up per request.
"""

from dataclasses import dataclass
from typing import Any


class RoostError(Exception):
    pass


class ConfigurationError(RoostError):
    """Bad route pattern, bad binding declaration, or a route/slot mismatch."""


@dataclass(frozen=True, slots=True)
class HTTPError(RoostError):
    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        return f"{self.status}: {self.detail}" if self.detail else str(self.status)


class NotFound(HTTPError):  # noqa: N818
    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(404, detail)


class ModelNotFound(NotFound):
    """A bound path value matched no row (or a lookup override returned None).

    ``model``, ``key`` and ``value`` identify the failed lookup, for
    handlers registered with ``@app.error(ModelNotFound)``.
    """

    __slots__ = ("key", "model", "value")

    def __init__(self, model: type, key: str, value: Any, detail: str = "") -> None:
        super().__init__(detail or f"{model.__name__} not found ({key}={value})")
        object.__setattr__(self, "model", model)
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "value", value)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """The path matched but not for this method; carries an ``Allow`` header."""

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow = ", ".join(sorted(allowed))
        detail = detail or f"Method not allowed. Allowed methods: {allow}"
        super().__init__(405, detail, (("Allow", allow),))

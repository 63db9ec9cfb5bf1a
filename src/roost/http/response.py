"""Outgoing responses.

``Response`` is frozen; the ``with_*`` helpers hand back modified copies,
so error handlers and middleware can adjust a response without touching
the one a handler returned.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace

type HeaderPairs = tuple[tuple[str, str], ...]


@dataclass(frozen=True, slots=True)
class Response:
    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: HeaderPairs = ()

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        return self.with_headers(((name, value),))

    def with_headers(self, headers: Mapping[str, str] | Iterable[tuple[str, str]]) -> Response:
        """Append headers; existing ones with the same name are kept."""
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        return replace(self, headers=self.headers + tuple(pairs))

    def header(self, name: str) -> str | None:
        """First value sent for *name*, matched case-insensitively."""
        wanted = name.lower()
        return next((v for k, v in self.headers if k.lower() == wanted), None)

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode() if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body if isinstance(self.body, str) else self.body.decode()


@dataclass(frozen=True, slots=True)
class Redirect:
    """Return from a handler to send the client elsewhere (302 unless told otherwise)."""

    url: str
    status: int = 302
    headers: HeaderPairs = ()

"""Callable aliases shared by the app and the server."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Called as handler(request, *bound_values) when bound, by signature otherwise.
Handler: TypeAlias = Callable[..., Any]

# Takes (), (request) or (request, exc); returns anything negotiate() accepts.
ErrorHandler: TypeAlias = Callable[..., Any]

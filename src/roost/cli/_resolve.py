"""Find the ``App`` a command was pointed at (``blog``, ``blog:app``, ``blog:create_app``)."""

import importlib
import sys

from roost.app import App


def resolve_app(target: str) -> App:
    """Import ``module[:name]`` (``name`` defaults to ``app``) and return the App.

    A callable that isn't an App is treated as a factory and called once
    with no arguments. Import failures propagate; anything else that
    doesn't end in an App raises ``TypeError``.
    """
    module_name, _, name = target.partition(":")
    found = getattr(importlib.import_module(module_name), name or "app")

    if not isinstance(found, App) and callable(found):
        try:
            found = found()
        except Exception as exc:
            msg = f"{target!r}: factory failed: {exc}"
            raise TypeError(msg) from exc

    if isinstance(found, App):
        return found
    msg = f"{target!r} is a {type(found).__name__}, not a roost.App"
    raise TypeError(msg)


def load_app(target: str) -> App:
    try:
        return resolve_app(target)
    except (ImportError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

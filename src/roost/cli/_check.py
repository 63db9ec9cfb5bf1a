"""``roost check`` — route model binding validation command.

Resolves an import string to a roost App and cross-checks every bound
handler against its route, printing results to stdout.  Exits with
code 1 if any problem is found.
"""

import argparse

from roost.cli._resolve import load_app
from roost.errors import ConfigurationError


def run_check(args: argparse.Namespace) -> None:
    """Validate route model bindings for a roost app."""
    app = load_app(args.app)

    try:
        issues = app.check()
    except ConfigurationError as exc:
        print(f"Error: {exc}")
        raise SystemExit(1) from exc

    bound = len(app.bindings)
    if not issues:
        print(f"OK: {len(app.routes)} route(s), {bound} bound handler(s), no problems.")
        return

    print(f"{len(issues)} problem(s) found:")
    for issue in issues:
        print(f"  {issue}")
    raise SystemExit(1)

"""``roost routes``: one row per route with the types it binds."""

import argparse

from roost.cli._resolve import load_app

_HEADER = ("METHOD", "PATH", "HANDLER", "BINDS")


def run_routes(args: argparse.Namespace) -> None:
    # The app is not frozen here, so broken bindings still get listed.
    app = load_app(args.app)
    if not app.routes:
        print("No routes registered.")
        return

    rows = [_HEADER]
    for route in app.routes:
        handler = getattr(route.handler, "__name__", repr(route.handler))
        if route.name:
            handler += f" ({route.name})"
        slots = app.bindings.lookup(route.handler)
        binds = "-" if slots is None else ", ".join(slot.describe() for slot in slots)
        rows.append((", ".join(sorted(route.methods)), route.path, handler, binds))

    widths = [max(len(row[col]) for row in rows) for col in range(3)]
    for i, row in enumerate(rows):
        cells = [cell.ljust(width) for cell, width in zip(row, widths, strict=False)]
        print("  ".join((*cells, row[3])).rstrip())
        if i == 0:
            print("-" * min(sum(widths) + 6 + len(row[3]), 80))

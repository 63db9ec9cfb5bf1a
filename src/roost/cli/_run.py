"""``roost run`` — development server command."""

import argparse

from roost.cli._resolve import load_app


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it with pounce.

    CLI ``--host``/``--port`` override the app's config.
    """
    app = load_app(args.app)
    app.run(host=args.host, port=args.port)

"""The ``roost`` command (``roost run|routes|check <module:app>``)."""

import argparse
import sys


def _cmd_run(args: argparse.Namespace) -> None:
    from roost.cli._run import run_server

    run_server(args)


def _cmd_routes(args: argparse.Namespace) -> None:
    from roost.cli._routes import run_routes

    run_routes(args)


def _cmd_check(args: argparse.Namespace) -> None:
    from roost.cli._check import run_check

    run_check(args)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roost",
        description="roost: ASGI routing with route model binding.",
    )
    commands = parser.add_subparsers(dest="command")
    for name, command, help_text in (
        ("run", _cmd_run, "serve the app with pounce"),
        ("routes", _cmd_routes, "print every route and what it binds"),
        ("check", _cmd_check, "validate route model bindings; exit 1 on problems"),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("app", help="module[:attribute], e.g. blog:app")
        sub.set_defaults(handler=command)
        if name == "run":
            sub.add_argument("--host", default=None)
            sub.add_argument("--port", type=int, default=None)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)
    args.handler(args)

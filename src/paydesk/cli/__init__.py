"""The ``paydesk`` command: ``paydesk routes`` and ``paydesk run``."""

import argparse
import sys

DEFAULT_APP = "paydesk.web:create_app"


def _add_app_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "app",
        nargs="?",
        default=DEFAULT_APP,
        help=f"module:attribute of an App or app factory (default: {DEFAULT_APP})",
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="paydesk", description="Run or inspect the paydesk site.")
    commands = parser.add_subparsers(dest="command")

    run = commands.add_parser("run", help="Serve the app with pounce")
    _add_app_argument(run)
    run.add_argument("--host", help="Bind address (default: config host)")
    run.add_argument("--port", type=int, help="Bind port (default: config port)")
    run.add_argument("--workers", type=int, help="Worker count (default: config workers)")

    routes = commands.add_parser("routes", help="Print the route table")
    _add_app_argument(routes)

    args = parser.parse_args(argv)
    if args.command == "run":
        from paydesk.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from paydesk.cli._routes import run_routes

        run_routes(args)
    else:
        parser.print_help()
        sys.exit(0)

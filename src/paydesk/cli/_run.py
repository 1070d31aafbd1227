"""``paydesk run``: serve an app with pounce."""

import argparse
import sys

from paydesk.cli._resolve import resolve_app


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it; flags win over the app's config.

    Logging is set up by pounce from ``log_level`` and ``log_format``.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from paydesk.server.serve import run_server as serve

    config = app.config
    serve(
        app,
        args.host or config.host,
        args.port or config.port,
        workers=config.workers if args.workers is None else args.workers,
        reload=config.debug,
        log_level=config.log_level,
        log_format=config.log_format,
        app_path=args.app if config.debug else None,
    )

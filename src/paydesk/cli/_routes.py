"""``paydesk routes``: print METHOD, PATH and HANDLER for every rule."""

import argparse
import sys

from paydesk.cli._resolve import resolve_app


def run_routes(args: argparse.Namespace) -> None:
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = [("METHOD", "PATH", "HANDLER")]
    for rule in app.routes:
        label = getattr(rule.handler, "__qualname__", None) or repr(rule.handler)
        rows.append((rule.method, rule.path, f"{label} ({rule.name})" if rule.name else label))
    if len(rows) == 1:
        print("No routes registered.")
        return

    method_width = max(len(row[0]) for row in rows)
    path_width = max(len(row[1]) for row in rows)
    for i, (method, path, label) in enumerate(rows):
        print(f"{method:<{method_width}}  {path:<{path_width}}  {label}")
        if i == 0:
            print("-" * min(method_width + path_width + 4 + max(len(r[2]) for r in rows), 80))

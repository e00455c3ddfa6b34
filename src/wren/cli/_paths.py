"""``wren paths`` — print the generated OpenAPI document as JSON."""

import argparse
import json
import sys

from wren.cli._resolve import resolve_app
from wren.openapi.paths import create_paths


def run_paths(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and print its document (or just ``paths``)."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    document = create_paths(app.router) if args.paths_only else app.openapi()
    print(json.dumps(document, indent=args.indent or None))

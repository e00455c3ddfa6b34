"""wren CLI — inspect an application's routes and generated OpenAPI document.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    parser = argparse.ArgumentParser(
        prog="wren",
        description="wren — layered routing with OpenAPI operations.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wren paths -------------------------------------------------------
    paths_parser = subparsers.add_parser("paths", help="Print the generated OpenAPI document")
    paths_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )
    paths_parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (0 for compact output)",
    )
    paths_parser.add_argument(
        "--paths-only",
        action="store_true",
        help="Print only the paths object instead of the full document",
    )

    # -- wren routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "paths":
        from wren.cli._paths import run_paths

        run_paths(args)
    elif args.command == "routes":
        from wren.cli._routes import run_routes

        run_routes(args)

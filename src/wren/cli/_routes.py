"""``wren routes`` — list registered routes.

Walks the app's layer tree and prints every route with its methods, its
OpenAPI path template, and whether it declares an operation.
"""

import argparse
import sys
from collections.abc import Iterable, Iterator

from wren.cli._resolve import resolve_app
from wren.openapi.decompile import Undecompilable, decompile
from wren.openapi.paths import operation_of
from wren.routing.layer import Layer, MountLayer, RouteLayer


def iter_routes(
    layers: Iterable[Layer],
    prefix: str = "",
    templated: bool = True,
) -> Iterator[tuple[str, str, bool]]:
    """Yield ``(methods, path, documented)`` for every route, in dispatch order.

    Paths that cannot be turned into a template fall back to the
    registered path and are marked with a leading ``~``.
    """
    for layer in layers:
        result = decompile(layer.pattern, layer.placeholders)
        if isinstance(result, Undecompilable):
            path, exact = prefix + layer.path.rstrip("/"), False
        else:
            path, exact = prefix + result.template, templated

        match layer:
            case RouteLayer():
                methods = ", ".join("ALL" if m == "*" else m for m in layer.methods)
                documented = any(
                    operation_of(handler) is not None for chain in layer.methods.values() for handler in chain
                )
                yield methods, ("" if exact else "~") + (path or "/"), documented
            case MountLayer():
                yield from iter_routes(layer.layers, path, exact)


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes for a wren app as a table."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = list(iter_routes(app.router.stack))
    if not rows:
        print("No routes registered.")
        return

    max_methods = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "OPENAPI"))
    print("-" * min(max_methods + max_path + 11, 80))
    for methods, path, documented in rows:
        print(fmt.format(methods, path, "yes" if documented else "-"))

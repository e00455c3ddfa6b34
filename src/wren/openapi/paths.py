"""OpenAPI ``paths`` generation by walking a router's layer tree.

The walk mirrors dispatch order exactly: layers are visited depth-first
in registration order, so an interceptor's operation applies to the
routes registered after it at or below its path, which are the routes the
interceptor really runs in front of.

    api = Router()
    api.use("/labs", api_operation({"tags": ["Labs"]}))
    api.get("/labs/:lab", api_operation({"summary": "Show lab"}), show_lab)

    create_paths(api)
    # {"/labs/{lab}": {"get": {"tags": ["Labs"], "summary": "Show lab"}}}

Layers whose pattern cannot be decompiled (optional or regex
placeholders, wildcards) are left out of the document, together with
everything mounted below them. They keep serving requests.
"""

import copy
import logging
from collections.abc import Iterable, Mapping
from typing import Any, TypeAlias

from wren._internal.types import Document, Operation
from wren.openapi.decompile import Undecompilable, decompile
from wren.openapi.merge import merge_operations
from wren.routing.layer import InterceptorLayer, Layer, MountLayer, RouteLayer
from wren.routing.router import Router

logger = logging.getLogger("wren.openapi")

# Active-operations table: path prefix -> descriptors registered there, in order
ActiveOperations: TypeAlias = dict[str, list[Mapping[str, Any]]]


def operation_of(handler: Any) -> Mapping[str, Any] | None:
    """The descriptor a handler declares through ``api_operation``, if any."""
    return getattr(handler, "api_operation", None)


def create_paths(
    layers: Router | Iterable[Layer],
    out: Document | None = None,
    prefix: str = "",
    active: ActiveOperations | None = None,
) -> Document:
    """Build the OpenAPI ``paths`` object for a router.

    Args:
        layers: A ``Router`` or its layer stack.
        out: Document to fill; first entry per (path, method) wins.
        prefix: Template of the mount point *layers* live under, without
            a trailing slash.
        active: Interceptor operations already in scope, keyed by the
            template of the path they were registered at.

    Returns:
        ``out`` — path template -> lowercase method -> merged operation.
    """
    if out is None:
        out = {}
    if active is None:
        active = {}
    stack = layers.stack if isinstance(layers, Router) else layers

    for layer in stack:
        result = decompile(layer.pattern, layer.placeholders)
        if isinstance(result, Undecompilable):
            logger.debug("Skipping %r in OpenAPI paths: %s", layer.path, result.reason)
            continue
        path = prefix + result.template

        match layer:
            case RouteLayer():
                _add_route(out, path or "/", layer, active)
            case MountLayer():
                create_paths(layer.layers, out, path, active)
            case InterceptorLayer():
                if layer.api_operation is not None:
                    active.setdefault(path, []).append(layer.api_operation)

    return out


def _inherited(path: str, active: ActiveOperations) -> Operation:
    """Fold every in-scope interceptor operation for *path*, earliest prefix first."""
    operation: Operation = {}
    for scope, operations in active.items():
        if path == scope or path.startswith(scope + "/"):
            for declared in operations:
                operation = merge_operations(operation, declared)
    return operation


def _add_route(out: Document, path: str, layer: RouteLayer, active: ActiveOperations) -> None:
    inherited = _inherited(path, active)

    for method, chain in layer.methods.items():
        # OpenAPI has no "any method" operation
        if method == "*":
            continue
        operation: Operation | None = None
        for handler in chain:
            declared = operation_of(handler)
            if declared is not None:
                operation = merge_operations(inherited if operation is None else operation, declared)
        if operation is None:
            continue

        entry = out.setdefault(path, {})
        # Detached so edits to the document never reach live descriptors
        if method.lower() not in entry:
            entry[method.lower()] = copy.deepcopy(operation)

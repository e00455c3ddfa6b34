"""OpenAPI support — operation middleware and document generation.

    api_operation     declare an operation on a route or prefix, validate requests
    create_paths      generate the ``paths`` object from a router's layer tree
    build_document    wrap the generated paths in a full OpenAPI document
    merge_operations  the cascade rule used while generating
    decompile         compiled route regex -> ``/path/{param}`` template
"""

from wren.openapi.decompile import Decompiled, PatternEnding, Undecompilable, decompile
from wren.openapi.document import build_document
from wren.openapi.merge import merge_operations
from wren.openapi.operation import OperationMiddleware, api_operation
from wren.openapi.paths import create_paths

__all__ = [
    "Decompiled",
    "OperationMiddleware",
    "PatternEnding",
    "Undecompilable",
    "api_operation",
    "build_document",
    "create_paths",
    "decompile",
    "merge_operations",
]

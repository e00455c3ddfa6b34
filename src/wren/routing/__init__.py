"""Routing — ordered layer stacks with Express-style path patterns.

Layers are registered during setup and dispatched in registration order.
"""

from wren.routing.layer import InterceptorLayer, Layer, MountLayer, RouteLayer
from wren.routing.pattern import CompiledPath, PathKey, PathMatch, compile_path
from wren.routing.router import RouteBuilder, Router

__all__ = [
    "CompiledPath",
    "InterceptorLayer",
    "Layer",
    "MountLayer",
    "PathKey",
    "PathMatch",
    "RouteBuilder",
    "RouteLayer",
    "Router",
    "compile_path",
]

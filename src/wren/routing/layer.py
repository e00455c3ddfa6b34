"""Routing layers — the three node kinds of a router's stack.

Every layer pairs a compiled path with a payload:

    RouteLayer        exact match, method -> handler chain
    MountLayer        prefix match, nested router
    InterceptorLayer  prefix match, one handler for every method

``Layer`` is the closed union of the three. Both request dispatch and
OpenAPI generation ``match`` on it, so adding a kind means updating both.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

from wren._internal.types import Handler
from wren.routing.pattern import CompiledPath, PathMatch

if TYPE_CHECKING:
    from wren.routing.router import Router


@dataclass(frozen=True, slots=True)
class _BaseLayer:
    compiled: CompiledPath

    @property
    def pattern(self) -> re.Pattern[str]:
        """The compiled matching regex."""
        return self.compiled.regex

    @property
    def placeholders(self) -> tuple[str, ...]:
        """Placeholder names in capture order."""
        return self.compiled.key_names

    @property
    def path(self) -> str:
        """The path string this layer was registered with."""
        return self.compiled.path

    def match(self, path: str) -> PathMatch | None:
        return self.compiled.match(path)


@dataclass(frozen=True, slots=True)
class RouteLayer(_BaseLayer):
    """A terminal route: method-bound handler chains on one exact path.

    ``methods`` keeps registration order; ``"*"`` is the catch-all chain
    registered with ``.all()``.
    """

    methods: Mapping[str, tuple[Handler, ...]]

    def chain_for(self, method: str) -> tuple[Handler, ...] | None:
        """Handler chain for *method*, honouring HEAD → GET and ``all``."""
        method = method.upper()
        if method in self.methods:
            return self.methods[method]
        if method == "HEAD" and "GET" in self.methods:
            return self.methods["GET"]
        return self.methods.get("*")

    @property
    def allowed(self) -> frozenset[str]:
        return frozenset(m for m in self.methods if m != "*")


@dataclass(frozen=True, slots=True)
class MountLayer(_BaseLayer):
    """A nested router mounted under a path prefix."""

    router: Router

    @property
    def layers(self) -> tuple[Layer, ...]:
        return self.router.stack


@dataclass(frozen=True, slots=True)
class InterceptorLayer(_BaseLayer):
    """A single handler for every method at or below a path prefix."""

    handler: Handler

    @property
    def api_operation(self) -> Any:
        """Descriptor carried by the handler, if it declares one."""
        return getattr(self.handler, "api_operation", None)


Layer: TypeAlias = RouteLayer | MountLayer | InterceptorLayer

"""Shared type aliases used across wren modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Layer handler: ``(request, next)`` callable, sync or async
Handler: TypeAlias = Callable[..., Any]

# Error handler: receives (request, error?) and returns a response value
ErrorHandler: TypeAlias = Callable[..., Any]

# Operation descriptor / generated document fragments are plain JSON-like dicts
Operation: TypeAlias = dict[str, Any]
Document: TypeAlias = dict[str, dict[str, Operation]]

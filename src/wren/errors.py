"""wren exception hierarchy.

Shared across Router, App, operation middleware, and the error boundary
so every module raises and catches the same types.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wren.validation.result import ValidationFinding


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when a router or app is set up incorrectly.

    Typically raised during route registration, before any request runs.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(WrenError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, middleware, or handlers. ``App.handle`` catches
    these and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 (conventional name in web frameworks)
    """404 — no layer handled the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 (conventional name in web frameworks)
    """405 — a route matched the path but not the HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class OpenAPIValidationError(WrenError):
    """A request did not conform to its declared operation.

    Carries the structured findings produced by the validator and the
    status the error boundary should answer with (400 unless configured
    otherwise)::

        try:
            await next(request)
        except OpenAPIValidationError as exc:
            exc.status   # 400
            exc.errors   # (ValidationFinding(...), ...)
    """

    name = "OpenAPIValidationError"

    def __init__(self, errors: Sequence[ValidationFinding], status: int = 400) -> None:
        self.message = "OpenAPIValidationError: Invalid data found"
        self.errors = tuple(errors)
        self.status = status
        super().__init__(self.message)

    def to_list(self) -> list[dict[str, str]]:
        """Findings as JSON-ready dicts, in the order they were found."""
        return [finding.to_dict() for finding in self.errors]

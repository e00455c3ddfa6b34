"""Operation middleware — declare an OpenAPI operation once, validate with it.

``api_operation()`` wraps an operation object into middleware that can be
placed anywhere a handler goes: in front of a route handler, or on its
own with ``router.use()`` to apply to a whole prefix::

    router.use("/labs/:lab", api_operation({
        "tags": ["Lab"],
        "parameters": [{"in": "path", "name": "lab", "required": True,
                        "schema": {"type": "string", "minLength": 1}}],
    }))

    router.get("/labs/:lab/instances/:user", api_operation({
        "summary": "Fetch instance",
        "responses": {404: {"description": "Instance does not exist"}},
    }), show_instance)

At request time the middleware exposes the operation as
``request.api_operation`` and validates the request, raising
``OpenAPIValidationError`` on failure. ``create_paths()`` reads the same
object back through the middleware's ``api_operation`` attribute.
"""

import copy
from collections.abc import Mapping
from typing import Any

from wren.errors import OpenAPIValidationError
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Next
from wren.validation.request import RequestValidator


class OperationMiddleware:
    """Middleware carrying one operation descriptor.

    Validation only looks at ``parameters`` (defaulting to ``[]``) and
    ``requestBody``; every other field is documentation.
    """

    __slots__ = ("_validator", "api_operation")

    def __init__(self, operation: Mapping[str, Any], *, status: int = 400, coerce: bool = True) -> None:
        self.api_operation: dict[str, Any] = copy.deepcopy(dict(operation))
        self._validator = RequestValidator(
            {
                "parameters": self.api_operation.get("parameters", []),
                "requestBody": self.api_operation.get("requestBody"),
            },
            status=status,
            coerce=coerce,
        )

    def __repr__(self) -> str:
        summary = self.api_operation.get("summary") or self.api_operation.get("operationId") or ""
        return f"OperationMiddleware({summary!r})"

    async def __call__(self, request: Request, next: Next) -> Response:
        request = request.with_operation(self.api_operation)
        result = self._validator.validate(request)
        if result is not None:
            raise OpenAPIValidationError(result.errors, result.status)
        return await next(request)


def api_operation(operation: Mapping[str, Any], *, status: int = 400, coerce: bool = True) -> OperationMiddleware:
    """Create middleware that declares and enforces *operation*.

    Args:
        operation: OpenAPI operation object (``parameters``,
            ``requestBody``, ``responses``, ``tags``, ``summary``, ...).
        status: Status carried by ``OpenAPIValidationError``.
        coerce: Coerce string parameters toward their declared type.
    """
    return OperationMiddleware(operation, status=status, coerce=coerce)

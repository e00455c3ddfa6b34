"""Request validation — check a request against its declared operation.

Usage::

    from wren.validation import validate_request

    result = validate_request(operation, request)
    if result is not None:
        # result.errors == (ValidationFinding(error_code="minLength.openapi.validation",
        #                                     location="path", ...),)
        ...

Operation middleware (``wren.openapi.api_operation``) does this for you
and raises ``OpenAPIValidationError`` with the findings.
"""

from collections.abc import Mapping
from typing import Any

from wren.http.request import Request
from wren.validation.request import RequestValidator, coerce_value
from wren.validation.result import RequestValidationResult, ValidationFinding
from wren.validation.schema import SchemaViolation, check_schema

__all__ = [
    "RequestValidationResult",
    "RequestValidator",
    "SchemaViolation",
    "ValidationFinding",
    "check_schema",
    "coerce_value",
    "validate_request",
]


def validate_request(
    operation: Mapping[str, Any],
    request: Request,
    *,
    status: int = 400,
) -> RequestValidationResult | None:
    """Validate *request* against *operation* in one call.

    Builds a throwaway ``RequestValidator``; prefer keeping a validator
    around when the same operation checks many requests.
    """
    return RequestValidator(operation, status=status).validate(request)

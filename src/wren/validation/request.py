"""Request validation against an OpenAPI operation.

``RequestValidator`` is built once per declared operation and reused for
every request it sees::

    validator = RequestValidator({
        "parameters": [
            {"in": "query", "name": "ip", "schema": {"type": "string", "enum": ["true", "false"]}},
        ],
    })
    result = validator.validate(request)
    if result is not None:
        raise OpenAPIValidationError(result.errors, result.status)

Parameters are read from the request by location; values arriving as
strings (path, query, headers, cookies) are coerced toward the declared
scalar type before checking. The body is checked against the JSON
schema of the declared request body.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from wren.http.request import Request
from wren.validation.result import RequestValidationResult, ValidationFinding
from wren.validation.schema import SchemaViolation, check_schema, format_path

logger = logging.getLogger("wren.validation")

# OpenAPI "in" value -> finding location
LOCATIONS: dict[str, str] = {
    "path": "path",
    "query": "query",
    "header": "headers",
    "cookie": "cookies",
}

_INTEGER_RE = re.compile(r"^-?\d+$")
_NUMBER_RE = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?$")


def error_code(keyword: str) -> str:
    """Finding code for a failed schema keyword."""
    return f"{keyword}.openapi.validation"


def coerce_value(value: Any, schema: Mapping[str, Any]) -> Any:
    """Coerce string input toward the scalar type *schema* declares.

    Values that cannot be coerced are returned unchanged so the type
    rule reports them.
    """
    expected = schema.get("type")
    if isinstance(value, list | tuple):
        items = schema.get("items") or {}
        return [coerce_value(item, items) for item in value]
    if not isinstance(value, str):
        return value
    if expected == "integer" and _INTEGER_RE.match(value):
        return int(value)
    if expected == "number" and _NUMBER_RE.match(value):
        return float(value) if any(c in value for c in ".eE") else int(value)
    if expected == "boolean" and value in ("true", "false"):
        return value == "true"
    return value


class RequestValidator:
    """Validates requests against one operation's parameters and body.

    Args:
        operation: The operation descriptor; only ``parameters`` and
            ``requestBody`` are read.
        status: Status reported with findings.
        coerce: Coerce string parameters toward declared scalar types.
    """

    __slots__ = ("_body", "_parameters", "coerce", "status")

    def __init__(
        self,
        operation: Mapping[str, Any],
        *,
        status: int = 400,
        coerce: bool = True,
    ) -> None:
        self._parameters: tuple[Mapping[str, Any], ...] = tuple(operation.get("parameters") or ())
        self._body: Mapping[str, Any] | None = operation.get("requestBody")
        self.status = status
        self.coerce = coerce

    def validate(self, request: Request) -> RequestValidationResult | None:
        """Return findings for *request*, or ``None`` when it conforms."""
        findings: list[ValidationFinding] = []
        for parameter in self._parameters:
            findings.extend(self._check_parameter(parameter, request))
        if self._body is not None:
            findings.extend(self._check_body(self._body, request))

        if not findings:
            return None
        logger.debug(
            "%s %s failed validation: %d finding(s)",
            request.method,
            request.path,
            len(findings),
        )
        return RequestValidationResult(errors=tuple(findings), status=self.status)

    # -- Parameters --

    def _check_parameter(self, parameter: Mapping[str, Any], request: Request) -> list[ValidationFinding]:
        where = parameter.get("in")
        name = parameter.get("name")
        location = LOCATIONS.get(where or "")
        if location is None or not name:
            return []

        schema: Mapping[str, Any] = parameter.get("schema") or {}
        value = _read_parameter(request, where, name, schema)

        if value is None:
            if parameter.get("required"):
                return [
                    ValidationFinding(
                        error_code=error_code("required"),
                        location=location,
                        message="This field is required",
                        path=name,
                    )
                ]
            return []

        if self.coerce:
            value = coerce_value(value, schema)
        return [_finding(v, location, prefix=(name,)) for v in check_schema(value, schema)]

    # -- Body --

    def _check_body(self, body: Mapping[str, Any], request: Request) -> list[ValidationFinding]:
        if request.body is None:
            if body.get("required"):
                return [
                    ValidationFinding(
                        error_code=error_code("required"),
                        location="body",
                        message="Request body is required",
                        path="",
                    )
                ]
            return []

        schema = _body_schema(body, request.content_type)
        if schema is None:
            return []
        return [_finding(v, "body") for v in check_schema(request.body, schema)]


def _read_parameter(request: Request, where: str, name: str, schema: Mapping[str, Any]) -> Any:
    match where:
        case "path":
            return request.path_params.get(name)
        case "query":
            if name not in request.query:
                return None
            if schema.get("type") == "array":
                return request.query.get_list(name)
            return request.query.get(name)
        case "header":
            return request.headers.get(name)
        case "cookie":
            return request.cookies.get(name)
    return None


def _body_schema(body: Mapping[str, Any], content_type: str | None) -> Mapping[str, Any] | None:
    """Pick the schema for the request's media type, JSON first."""
    content: Mapping[str, Any] = body.get("content") or {}
    if not content:
        return None
    media = (content_type or "").split(";", 1)[0].strip().lower()
    entry = content.get(media) or content.get("application/json") or next(iter(content.values()))
    return (entry or {}).get("schema")


def _finding(violation: SchemaViolation, location: str, prefix: tuple[str, ...] = ()) -> ValidationFinding:
    return ValidationFinding(
        error_code=error_code(violation.keyword),
        location=location,
        message=violation.message,
        path=format_path((*prefix, *violation.path)),
    )

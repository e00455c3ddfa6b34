"""Recursive schema checking built on the keyword rules."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from wren.validation.rules import KEYWORD_RULES, of_type

SchemaPath: TypeAlias = tuple[str | int, ...]


@dataclass(frozen=True, slots=True)
class SchemaViolation:
    """A keyword that rejected a value at *path* inside the checked document."""

    keyword: str
    message: str
    path: SchemaPath = ()


def format_path(path: SchemaPath) -> str:
    """Render ``("items", 0, "name")`` as ``items[0].name``."""
    out = ""
    for part in path:
        if isinstance(part, int):
            out += f"[{part}]"
        elif out:
            out += f".{part}"
        else:
            out = part
    return out


def check_schema(value: Any, schema: Mapping[str, Any], path: SchemaPath = ()) -> list[SchemaViolation]:
    """Check *value* against *schema*; an empty list means it conforms.

    A type mismatch is reported alone: once the type is wrong the other
    keywords have nothing meaningful to say.
    """
    if value is None and schema.get("nullable"):
        return []

    if "type" in schema:
        error = of_type(schema["type"])(value)
        if error is not None:
            return [SchemaViolation("type", error, path)]

    violations: list[SchemaViolation] = []
    for keyword, factory in KEYWORD_RULES.items():
        if keyword not in schema:
            continue
        error = factory(schema[keyword], schema)(value)
        if error is not None:
            violations.append(SchemaViolation(keyword, error, path))

    if isinstance(value, Mapping):
        violations.extend(_check_object(value, schema, path))
    elif isinstance(value, list | tuple) and isinstance(schema.get("items"), Mapping):
        for index, item in enumerate(value):
            violations.extend(check_schema(item, schema["items"], (*path, index)))

    return violations


def _check_object(value: Mapping[str, Any], schema: Mapping[str, Any], path: SchemaPath) -> list[SchemaViolation]:
    violations: list[SchemaViolation] = []
    properties: Mapping[str, Any] = schema.get("properties") or {}

    for name in schema.get("required") or ():
        if name not in value:
            violations.append(SchemaViolation("required", "This field is required", (*path, name)))

    for name, prop_schema in properties.items():
        if name in value:
            violations.extend(check_schema(value[name], prop_schema, (*path, name)))

    extra = schema.get("additionalProperties", True)
    for name in value:
        if name in properties:
            continue
        if extra is False:
            violations.append(SchemaViolation("additionalProperties", "Unexpected field", (*path, name)))
        elif isinstance(extra, Mapping):
            violations.extend(check_schema(value[name], extra, (*path, name)))

    return violations

"""Schema keyword rules.

Each JSON-Schema keyword the validator understands maps to a factory that
turns the keyword's value into a rule::

    def rule(value: Any) -> str | None:
        '''Return error message, or None if valid.'''

Rules only judge values of the type they apply to (``minLength`` ignores
numbers, ``minimum`` ignores strings); type mismatches are reported once
by ``of_type`` instead. ``type``, ``required``, ``properties``,
``additionalProperties`` and ``items`` are structural and handled by
``wren.validation.schema``.
"""

import re
from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

# Type alias for a rule function
Rule: TypeAlias = Callable[[Any], str | None]

# Type alias for a rule factory: (keyword value, whole schema) -> rule
RuleFactory: TypeAlias = Callable[[Any, Mapping[str, Any]], Rule]


def is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, float) and value.is_integer())


# ---------------------------------------------------------------------------
# Type
# ---------------------------------------------------------------------------

_TYPE_CHECKS: dict[str, Callable[[Any], bool]] = {
    "string": lambda v: isinstance(v, str),
    "integer": is_integer,
    "number": is_number,
    "boolean": lambda v: isinstance(v, bool),
    "array": lambda v: isinstance(v, list | tuple),
    "object": lambda v: isinstance(v, Mapping),
    "null": lambda v: v is None,
}


def of_type(expected: str | list[str]) -> Rule:
    """Value must have one of the JSON types in *expected*."""
    names = [expected] if isinstance(expected, str) else list(expected)

    def check(value: Any) -> str | None:
        for name in names:
            type_check = _TYPE_CHECKS.get(name)
            if type_check is None or type_check(value):
                return None
        return f"Must be of type {' or '.join(names)}"

    return check


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------


def min_length(n: int) -> Rule:
    """String must be at least *n* characters."""

    def check(value: Any) -> str | None:
        if isinstance(value, str) and len(value) < n:
            return f"Must be at least {n} characters"
        return None

    return check


def max_length(n: int) -> Rule:
    """String must be at most *n* characters."""

    def check(value: Any) -> str | None:
        if isinstance(value, str) and len(value) > n:
            return f"Must be at most {n} characters"
        return None

    return check


def matches(pattern: str) -> Rule:
    """String must contain a match for *pattern* (unanchored, as in JSON Schema)."""
    compiled = re.compile(pattern)

    def check(value: Any) -> str | None:
        if isinstance(value, str) and not compiled.search(value):
            return f"Must match pattern: {pattern}"
        return None

    return check


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def one_of(choices: list[Any]) -> Rule:
    """Value must equal one of *choices*."""

    def check(value: Any) -> str | None:
        if value not in choices:
            options = ", ".join(str(choice) for choice in choices)
            return f"Must be one of: {options}"
        return None

    return check


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


def minimum(bound: float, *, exclusive: bool = False) -> Rule:
    """Number must be >= *bound* (> when *exclusive*)."""

    def check(value: Any) -> str | None:
        if not is_number(value):
            return None
        if exclusive and value <= bound:
            return f"Must be greater than {bound}"
        if not exclusive and value < bound:
            return f"Must be at least {bound}"
        return None

    return check


def maximum(bound: float, *, exclusive: bool = False) -> Rule:
    """Number must be <= *bound* (< when *exclusive*)."""

    def check(value: Any) -> str | None:
        if not is_number(value):
            return None
        if exclusive and value >= bound:
            return f"Must be less than {bound}"
        if not exclusive and value > bound:
            return f"Must be at most {bound}"
        return None

    return check


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------


def min_items(n: int) -> Rule:
    """Array must contain at least *n* items."""

    def check(value: Any) -> str | None:
        if isinstance(value, list | tuple) and len(value) < n:
            return f"Must contain at least {n} items"
        return None

    return check


def max_items(n: int) -> Rule:
    """Array must contain at most *n* items."""

    def check(value: Any) -> str | None:
        if isinstance(value, list | tuple) and len(value) > n:
            return f"Must contain at most {n} items"
        return None

    return check


def unique_items(enabled: bool) -> Rule:
    """Array items must be distinct when *enabled*."""

    def check(value: Any) -> str | None:
        if not enabled or not isinstance(value, list | tuple):
            return None
        seen: list[Any] = []
        for item in value:
            if item in seen:
                return "Must not contain duplicate items"
            seen.append(item)
        return None

    return check


# ---------------------------------------------------------------------------
# Keyword table
# ---------------------------------------------------------------------------


def _exclusive_bound(value: Any, schema: Mapping[str, Any], *, lower: bool) -> Rule:
    # OpenAPI 3.0 uses a boolean modifier on minimum/maximum,
    # JSON Schema 2019+ a numeric bound of its own.
    if isinstance(value, bool):
        return lambda _v: None
    return minimum(value, exclusive=True) if lower else maximum(value, exclusive=True)


KEYWORD_RULES: dict[str, RuleFactory] = {
    "enum": lambda v, _s: one_of(list(v)),
    "minLength": lambda v, _s: min_length(v),
    "maxLength": lambda v, _s: max_length(v),
    "pattern": lambda v, _s: matches(v),
    "minimum": lambda v, s: minimum(v, exclusive=s.get("exclusiveMinimum") is True),
    "maximum": lambda v, s: maximum(v, exclusive=s.get("exclusiveMaximum") is True),
    "exclusiveMinimum": lambda v, s: _exclusive_bound(v, s, lower=True),
    "exclusiveMaximum": lambda v, s: _exclusive_bound(v, s, lower=False),
    "minItems": lambda v, _s: min_items(v),
    "maxItems": lambda v, _s: max_items(v),
    "uniqueItems": lambda v, _s: unique_items(bool(v)),
}

"""Pattern decompiler — compiled route regex back to an OpenAPI path template.

Reverses ``wren.routing.pattern.compile_path`` for the shapes it emits
for plain literal segments and required ``:name`` placeholders::

    decompile(compile_path("/foo/:bar").regex, ["bar"])
    # Decompiled(template="/foo/{bar}", ending=PatternEnding.EXACT)

Anything else (optional, repeated, wildcard or inline-regex placeholders,
hand-written regexes) yields ``Undecompilable`` with the reason. Failure
is a value, not an exception: callers skip the layer and carry on.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from wren.routing.pattern import PathKey

# Suffixes as they read once "\/" and "\." are unescaped
_EXACT_SUFFIX = "/?$"
_PREFIX_SUFFIX = "/?(?=/|$)"

# One required placeholder segment
_CAPTURE = "/(?:([^/]+?))"

_UNESCAPE_RE = re.compile(r"\\([./])")


class PatternEnding(Enum):
    """How a compiled pattern ends."""

    EXACT = "exact"  # terminal route
    PREFIX = "prefix"  # mount or interceptor boundary


@dataclass(frozen=True, slots=True)
class Decompiled:
    """A successfully recovered path template."""

    template: str
    ending: PatternEnding


@dataclass(frozen=True, slots=True)
class Undecompilable:
    """Why a pattern could not be turned into a template."""

    reason: str

    def __bool__(self) -> bool:
        return False


DecompileResult: TypeAlias = Decompiled | Undecompilable


def decompile(pattern: re.Pattern[str] | str, placeholders: Sequence[str | PathKey] = ()) -> DecompileResult:
    """Recover the path template from a compiled route pattern.

    Args:
        pattern: The compiled regex (or its source text).
        placeholders: Placeholder names in capture order, as strings or
            ``PathKey`` objects.

    Returns:
        ``Decompiled`` with the template and the pattern's ending, or
        ``Undecompilable`` describing the first unsupported construct.
    """
    source = pattern.pattern if isinstance(pattern, re.Pattern) else pattern
    names = [p.name if isinstance(p, PathKey) else p for p in placeholders]

    if not source.startswith("^"):
        return Undecompilable("Bad input: Missing start anchor")
    text = _UNESCAPE_RE.sub(r"\1", source[1:])

    if text.endswith(_EXACT_SUFFIX):
        text, ending = text[: -len(_EXACT_SUFFIX)], PatternEnding.EXACT
    elif text.endswith(_PREFIX_SUFFIX):
        text, ending = text[: -len(_PREFIX_SUFFIX)], PatternEnding.PREFIX
    else:
        return Undecompilable("Bad input: Cannot determine ending")

    components: list[str] = []
    scan = 0
    captured = 0

    while scan < len(text):
        if text.startswith(_CAPTURE, scan):
            scan += len(_CAPTURE)
            if captured >= len(names):
                return Undecompilable(f"Bad input: Unexpected capture group at position {scan}")
            components.append("/{" + names[captured] + "}")
            captured += 1
        elif text.startswith("/", scan):
            next_slash = text.find("/", scan + 1)
            segment = text[scan:] if next_slash == -1 else text[scan:next_slash]
            # A "(" never survives compilation as a literal; it opens a group.
            if "(" in segment:
                return Undecompilable(f"Bad input: Unexpected group at position {scan + segment.index('(')}")
            components.append(segment)
            if next_slash == -1:
                break
            scan = next_slash
        else:
            return Undecompilable(f'Bad input: Unexpected character "{text[scan]}" at position {scan}')

    return Decompiled(template="".join(components), ending=ending)

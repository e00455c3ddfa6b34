"""Path compiler — turns ``/users/:id`` into an anchored matching regex.

The output follows the classic Express 4 path grammar::

    compile_path("/foo/:bar").regex.pattern
    # '^\\/foo\\/(?:([^\\/]+?))\\/?$'

    compile_path("/foo", end=False).regex.pattern
    # '^\\/foo\\/?(?=\\/|$)'

Every ``/`` and ``.`` is escaped, a named placeholder becomes a lazy
non-separator capture, and the pattern ends with either ``\\/?$`` (exact
match) or ``\\/?(?=\\/|$)`` (prefix match). ``wren.openapi.decompile``
reverses exactly this shape, so the two modules must change together.

Supported tokens:

    :name          required segment       /(?:([^/]+?))
    :name?         optional segment       (?:/([^/]+?))?
    :name(\\d+)     inline regex           /(?:(\\d+))
    :name*         repeated segments      /(?:([^/]+?(?:[/].+?)?))
    *              wildcard               (.*)
    .:ext          format segment         (?:\\.([^/.]+?))
"""

import re
from dataclasses import dataclass
from urllib.parse import unquote

from wren.errors import ConfigurationError

# slash? dot? :name (regex)? star? optional? or a bare wildcard
_TOKEN_RE = re.compile(r"(\\/)?(\\\.)?:(\w+)(\(.*?\))?(\*)?(\?)?|\*")


@dataclass(frozen=True, slots=True)
class PathKey:
    """A placeholder captured by a compiled path, in capture order."""

    name: str


@dataclass(frozen=True, slots=True)
class PathMatch:
    """Result of matching a request path against a compiled path.

    ``matched`` is the consumed prefix (the whole path for exact
    patterns); ``params`` holds the URL-decoded placeholder values.
    """

    matched: str
    params: dict[str, str]


@dataclass(frozen=True, slots=True)
class CompiledPath:
    """A compiled path: regex plus its ordered placeholder keys."""

    path: str
    regex: re.Pattern[str]
    keys: tuple[PathKey, ...]

    @property
    def key_names(self) -> tuple[str, ...]:
        return tuple(key.name for key in self.keys)

    def match(self, path: str) -> PathMatch | None:
        """Match *path* from its start; ``None`` when it does not match."""
        m = self.regex.match(path)
        if m is None:
            return None
        params: dict[str, str] = {}
        for key, value in zip(self.keys, m.groups()):
            if value is not None:
                params[key.name] = unquote(value)
        return PathMatch(matched=m.group(0), params=params)


def compile_path(
    path: str,
    *,
    end: bool = True,
    strict: bool = False,
    case_sensitive: bool = False,
) -> CompiledPath:
    """Compile a route path into a ``CompiledPath``.

    Args:
        path: Route path such as ``"/labs/:lab/instances"``.
        end: ``True`` for terminal routes (whole path must match),
            ``False`` for mounts and interceptors (prefix match that
            stops at a ``/`` boundary).
        strict: Do not append the optional trailing slash.
        case_sensitive: Match letters case-sensitively.

    Raises:
        ConfigurationError: If an inline placeholder regex is invalid.
    """
    keys: list[PathKey] = []
    wildcards = 0

    def replace(m: re.Match[str]) -> str:
        nonlocal wildcards
        if m.group(0) == "*":
            keys.append(PathKey(name=str(wildcards)))
            wildcards += 1
            return "(.*)"

        slash = m.group(1) or ""
        fmt = m.group(2) or ""
        name = m.group(3)
        optional = m.group(6) or ""
        if m.group(4):
            capture = m.group(4)
        elif m.group(5):
            capture = f"([^\\/{fmt}]+?(?:[\\/{fmt}].+?)?)"
        else:
            capture = f"([^\\/{fmt}]+?)"

        keys.append(PathKey(name=name))
        return (
            ("" if optional else slash)
            + "(?:"
            + fmt
            + (slash if optional else "")
            + capture
            + ")"
            + optional
        )

    if strict:
        trailing = ""
    elif path.endswith("/"):
        trailing = "?"
    else:
        trailing = "/?"

    source = (path + trailing).replace("/(", "/(?:")
    source = re.sub(r"([/.])", r"\\\1", source)
    source = "^" + _TOKEN_RE.sub(replace, source)

    if end:
        source += "$"
    elif not source.endswith("/"):
        source += r"(?=\/|$)"

    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        regex = re.compile(source, flags)
    except re.error as exc:
        msg = f"Cannot compile route path {path!r}: {exc}"
        raise ConfigurationError(msg) from exc

    return CompiledPath(path=path, regex=regex, keys=tuple(keys))

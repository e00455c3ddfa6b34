"""Immutable query string parameters.

Keeps every ``name=value`` pair in arrival order, so repeated names
(``?tag=a&tag=b``) survive for array parameters.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl, urlencode


class QueryParams(Mapping[str, str]):
    """Query string parameters as an ordered multi-value mapping.

    ``__getitem__`` returns the first value for a name; ``get_list``
    returns all of them. Blank values (``?flag=``) are kept as ``""``.
    """

    __slots__ = ("_pairs", "_raw")

    _pairs: tuple[tuple[str, str], ...]
    _raw: str

    def __init__(self, query_string: str = "") -> None:
        object.__setattr__(self, "_raw", query_string)
        object.__setattr__(self, "_pairs", tuple(parse_qsl(query_string, keep_blank_values=True)))

    @classmethod
    def from_mapping(cls, values: Mapping[str, str | list[str]]) -> QueryParams:
        """Build from a plain dict, e.g. ``{"ip": "true", "tag": ["a", "b"]}``."""
        return cls(urlencode(values, doseq=True))

    def __getitem__(self, key: str) -> str:
        for name, value in self._pairs:
            if name == key:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len(dict.fromkeys(name for name, _ in self._pairs))

    def __repr__(self) -> str:
        return f"QueryParams({self._raw!r})"

    @property
    def raw(self) -> str:
        """The query string as received, without the leading ``?``."""
        return self._raw

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*, in order."""
        return [value for name, value in self._pairs if name == key]

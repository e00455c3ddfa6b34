"""Immutable HTTP request.

Frozen metadata plus an already-decoded body. Middleware never mutates a
request; it hands a modified copy to ``next`` instead::

    async def tag(request: Request, next: Next) -> Response:
        return await next(request.with_path_params({"tenant": "acme"}))
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import unquote, urlsplit

from wren.http.headers import Headers
from wren.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``body`` holds the decoded payload (parsed JSON, form dict, or raw
    bytes) or ``None`` when the request has no body. Transport adapters
    are responsible for decoding; the router and validator only read it.

    ``api_operation`` is set by operation middleware so downstream
    handlers can read the declared contract (e.g. a documented response
    example).
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    path_params: Mapping[str, str] = field(default_factory=dict)
    cookies: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    api_operation: Mapping[str, Any] | None = None

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus query string."""
        if self.query.raw:
            return f"{self.path}?{self.query.raw}"
        return self.path

    # -- Copies --

    def with_path_params(self, params: Mapping[str, str]) -> Request:
        """Return a copy whose path params include *params* (later wins)."""
        return replace(self, path_params={**self.path_params, **params})

    def with_operation(self, operation: Mapping[str, Any]) -> Request:
        """Return a copy exposing *operation* as ``api_operation``."""
        return replace(self, api_operation=operation)

    # -- Factory --

    @classmethod
    def build(
        cls,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
    ) -> Request:
        """Create a Request from a method and a URL with optional query string."""
        parts = urlsplit(url)
        header_map = Headers(headers or {})
        return cls(
            method=method.upper(),
            path=parts.path or "/",
            headers=header_map,
            query=QueryParams(parts.query),
            cookies=_cookie_jar(header_map.get("cookie") or ""),
            body=body,
        )


def _cookie_jar(header: str) -> dict[str, str]:
    """Cookie header -> dict; the first occurrence of a name wins, quotes are stripped."""
    jar: dict[str, str] = {}
    for pair in header.split(";"):
        name, sep, value = pair.partition("=")
        name = name.strip()
        if sep and name and name not in jar:
            jar[name] = unquote(value.strip().strip('"'))
    return jar

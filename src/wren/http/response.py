"""Response value returned from handlers and error boundaries.

A ``Response`` never changes after construction. Status, headers and
content type are adjusted by deriving a copy::

    Response.json(findings, status=400).with_header("X-Request-Id", rid)
"""

from __future__ import annotations

import json as json_module
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any

_TEXT = "text/plain; charset=utf-8"
_JSON = "application/json"


@dataclass(frozen=True, slots=True)
class Response:
    """Body, status, content type and extra header pairs.

    ``headers`` holds only headers added through ``with_header`` and
    ``with_headers``; ``content_type`` is kept separately so the
    negotiation layer can default it.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = _TEXT
    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def json(cls, data: Any, status: int = 200) -> Response:
        return cls(json_module.dumps(data), status, _JSON)

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_content_type(self, content_type: str) -> Response:
        return replace(self, content_type=content_type)

    def with_header(self, name: str, value: str) -> Response:
        return self.with_headers([(name, value)])

    def with_headers(self, headers: Mapping[str, str] | Iterable[tuple[str, str]]) -> Response:
        """Append header pairs; repeated names are kept, not replaced."""
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        return replace(self, headers=self.headers + tuple(pairs))

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of an added header, matched case-insensitively."""
        wanted = name.lower()
        if wanted == "content-type":
            return self.content_type
        return next((v for k, v in self.headers if k.lower() == wanted), default)

    @property
    def body_bytes(self) -> bytes:
        body = self.body
        return body.encode() if isinstance(body, str) else body

    @property
    def text(self) -> str:
        body = self.body
        return body.decode() if isinstance(body, bytes) else body

    def json_body(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.text)

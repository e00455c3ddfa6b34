"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Operation middleware (request validation plus OpenAPI metadata) lives in
``wren.openapi.operation``.
"""

from wren.middleware.protocol import Middleware, Next

__all__ = [
    "Middleware",
    "Next",
]

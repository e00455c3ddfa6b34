"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Response: ...

No base class required. The router checks the shape, not the lineage.
Interceptors registered with ``router.use()`` and every handler in a
route's method chain share this signature; a handler that produces the
response simply never calls ``next``.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeAlias

from wren.http.request import Request
from wren.http.response import Response

# The next handler in the chain
Next: TypeAlias = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for wren middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(request: Request, next: Next) -> Response:
            start = time.monotonic()
            response = await next(request)
            elapsed = time.monotonic() - start
            return response.with_header("X-Time", f"{elapsed:.3f}")

        # Class middleware
        class RequireJSON:
            async def __call__(self, request: Request, next: Next) -> Response:
                ...
    """

    def __call__(self, request: Request, next: Next) -> Any: ...

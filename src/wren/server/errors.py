"""Error handling pipeline for wren requests.

Maps validation failures, HTTPError exceptions and unexpected failures
to Response objects, using registered error handlers or sensible
defaults.
"""

import inspect
import logging
import traceback
from collections.abc import Callable
from typing import Any, TypeAlias

from wren.errors import HTTPError, OpenAPIValidationError
from wren.http.request import Request
from wren.http.response import Response
from wren.server.negotiation import negotiate

logger = logging.getLogger("wren.server")

ErrorHandlers: TypeAlias = dict[int | type, Callable[..., Any]]


def _lookup(exc: Exception, status: int, error_handlers: ErrorHandlers) -> Callable[..., Any] | None:
    """Most specific handler: exception type (walking the MRO), then status."""
    for cls in type(exc).__mro__:
        if cls in error_handlers:
            return error_handlers[cls]
    return error_handlers.get(status)


async def call_error_handler(handler: Callable[..., Any], request: Request, exc: Exception) -> Response:
    """Invoke a user-registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc) args.
    Supports both sync and async error handlers.
    """
    sig = inspect.signature(handler)
    params = list(sig.parameters.values())

    if len(params) >= 2:
        result = handler(request, exc)
    elif len(params) == 1:
        result = handler(request)
    else:
        result = handler()

    if inspect.isawaitable(result):
        result = await result

    return negotiate(result)


async def handle_validation_error(
    exc: OpenAPIValidationError,
    request: Request,
    error_handlers: ErrorHandlers,
) -> Response:
    """Map a validation failure to a Response; the findings as JSON by default."""
    logger.debug("%d %s %s — %d finding(s)", exc.status, request.method, request.path, len(exc.errors))

    handler = _lookup(exc, exc.status, error_handlers)
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        if response.status == 200:
            response = response.with_status(exc.status)
        return response

    return Response.json(exc.to_list(), status=exc.status)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: ErrorHandlers,
) -> Response:
    """Map an HTTPError to a Response using registered error handlers."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    handler = _lookup(exc, exc.status, error_handlers)
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        # Preserve the HTTP status from the exception unless the handler
        # explicitly returned a Response with its own status
        if response.status == 200:
            response = response.with_status(exc.status)
        return response

    resp = Response(body=exc.detail or f"Error {exc.status}").with_status(exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: ErrorHandlers,
    debug: bool,
) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(500) or _lookup(exc, 500, error_handlers)
    if handler is not None:
        return await call_error_handler(handler, request, exc)

    if debug:
        body = "".join(traceback.format_exception(exc))
        return Response(body=body, status=500)

    return Response(body="Internal Server Error", status=500)

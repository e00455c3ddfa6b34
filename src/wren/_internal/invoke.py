"""Invoke helpers — call sync or async handlers uniformly.

wren handlers and middleware can be ``def`` or ``async def``. Any code
that calls a user-provided handler must handle both cases, so the
sync/async check lives here and nowhere else.

Usage::

    from wren._internal.invoke import invoke, invoke_layer_handler

    result = await invoke(handler, request, exc)
    result = await invoke_layer_handler(handler, request, next)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync: returns immediately
        def health(request, next):
            return {"ok": True}

        # async: returns a coroutine, awaited here
        async def audit(request, next):
            response = await next(request)
            return response.with_header("X-Audited", "1")
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


def _accepts_next(handler: Any) -> bool:
    try:
        params = list(inspect.signature(handler).parameters.values())
    except (TypeError, ValueError):
        return True
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params):
        return True
    return len(params) >= 2


async def invoke_layer_handler(handler: Any, request: Any, next: Any) -> Any:
    """Call a layer handler with ``(request, next)`` or just ``(request)``.

    Endpoint handlers that never continue the chain may omit ``next``::

        def show_lab(request):
            return {"lab": request.path_params["lab"]}
    """
    if _accepts_next(handler):
        return await invoke(handler, request, next)
    return await invoke(handler, request)

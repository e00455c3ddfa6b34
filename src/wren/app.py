"""wren application — a root router plus an error boundary.

Mutable during setup (layer registration, error handlers). Request
handling goes through ``App.handle``, which runs the router and maps
every exception to a Response.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from wren._internal.types import ErrorHandler, Handler
from wren.config import OpenAPIConfig, RouterConfig
from wren.errors import HTTPError, OpenAPIValidationError
from wren.http.request import Request
from wren.http.response import Response
from wren.openapi.document import build_document
from wren.openapi.operation import OperationMiddleware
from wren.routing.router import RouteBuilder, Router
from wren.server.errors import (
    handle_http_error,
    handle_internal_error,
    handle_validation_error,
)


class App:
    """The wren application.

    Usage::

        app = App(OpenAPIConfig(title="Labs API"))

        app.get("/labs/:lab", api_operation({...}), show_lab)
        app.use("/admin", admin_router)
        app.serve_openapi()

        @app.error(404)
        def not_found(request):
            return {"error": "Not Found"}, 404
    """

    __slots__ = ("_error_handlers", "config", "router")

    def __init__(
        self,
        config: OpenAPIConfig | None = None,
        router_config: RouterConfig | None = None,
    ) -> None:
        self.config = config or OpenAPIConfig()
        self.router = Router(router_config)
        self._error_handlers: dict[int | type, ErrorHandler] = {}

    # -- Registration (delegates to the root router) --

    def use(self, *args: Any) -> App:
        """Register interceptors or mount routers. See ``Router.use``."""
        self.router.use(*args)
        return self

    def route(self, path: str) -> RouteBuilder:
        return self.router.route(path)

    def get(self, path: str, *handlers: Handler) -> RouteBuilder:
        return self.router.get(path, *handlers)

    def post(self, path: str, *handlers: Handler) -> RouteBuilder:
        return self.router.post(path, *handlers)

    def put(self, path: str, *handlers: Handler) -> RouteBuilder:
        return self.router.put(path, *handlers)

    def patch(self, path: str, *handlers: Handler) -> RouteBuilder:
        return self.router.patch(path, *handlers)

    def delete(self, path: str, *handlers: Handler) -> RouteBuilder:
        return self.router.delete(path, *handlers)

    def error(self, code_or_exception: int | type) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler for a status code or exception type.

        Handlers may take ``()``, ``(request)`` or ``(request, exc)``.
        """

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- OpenAPI --

    def openapi(self) -> dict[str, Any]:
        """Generate the OpenAPI document for everything registered so far."""
        return build_document(self.router, self.config)

    def serve_openapi(self, path: str = "/openapi.json") -> RouteBuilder:
        """Register a GET route answering with the generated document.

        The document is generated per request, so routes registered after
        this call are still included.
        """

        def openapi_document(request: Request) -> Response:
            return Response.json(self.openapi())

        return self.router.get(path, openapi_document)

    def operation_middleware(self, operation: dict[str, Any]) -> OperationMiddleware:
        """``api_operation`` using this app's validation settings."""
        return OperationMiddleware(
            operation,
            status=self.config.validation_status,
            coerce=self.config.coerce_parameters,
        )

    # -- Request handling --

    async def handle(self, request: Request) -> Response:
        """Dispatch *request* and map any exception to a Response."""
        try:
            return await self.router.handle(request)
        except OpenAPIValidationError as exc:
            return await handle_validation_error(exc, request, self._error_handlers)
        except HTTPError as exc:
            return await handle_http_error(exc, request, self._error_handlers)
        except Exception as exc:
            return await handle_internal_error(exc, request, self._error_handlers, self.config.debug)

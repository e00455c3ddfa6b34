"""Layered router with registration-order dispatch.

Layers are tried strictly in the order they were registered, exactly
like the request will travel through them::

    api = Router()
    api.use(api_operation({"tags": ["Labs"]}))
    api.get("/labs/:lab", api_operation({...}), show_lab)

    root = Router()
    root.use(request_logger)
    root.use("/v1", api)

    response = await root.handle(Request.build("GET", "/v1/labs/mina"))

Interceptors and mounts match by prefix (stopping at a ``/`` boundary);
routes match the whole remaining path. A mount strips its prefix before
handing the request to the nested router, while ``request.path`` keeps
the original path.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from wren._internal.invoke import invoke_layer_handler
from wren._internal.types import Handler
from wren.config import RouterConfig
from wren.errors import ConfigurationError, MethodNotAllowed, NotFound
from wren.http.request import Request
from wren.http.response import Response
from wren.routing.layer import InterceptorLayer, Layer, MountLayer, RouteLayer
from wren.routing.pattern import compile_path
from wren.server.negotiation import negotiate

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"})

_Continue: TypeAlias = Callable[[Request], Awaitable[Response]]


@dataclass(slots=True)
class _Dispatch:
    """Per-request bookkeeping shared by every router the request visits."""

    allowed: set[str] = field(default_factory=set)


class RouteBuilder:
    """Adds method chains to one ``RouteLayer``.

    Returned by ``Router.route()``; every call returns the builder so
    registrations chain::

        router.route("/labs/:lab").get(show_lab).put(update_lab)
    """

    __slots__ = ("_methods", "layer")

    def __init__(self, layer: RouteLayer, methods: dict[str, tuple[Handler, ...]]) -> None:
        self.layer = layer
        self._methods = methods

    def add(self, method: str, *handlers: Handler) -> RouteBuilder:
        """Append *handlers* to the chain for *method* (``"*"`` for all)."""
        if not handlers:
            msg = f"{method} {self.layer.path!r} requires at least one handler."
            raise ConfigurationError(msg)
        method = method.upper()
        if method != "*" and method not in HTTP_METHODS:
            msg = f"Unsupported HTTP method {method!r} for {self.layer.path!r}."
            raise ConfigurationError(msg)
        self._methods[method] = (*self._methods.get(method, ()), *handlers)
        return self

    def get(self, *handlers: Handler) -> RouteBuilder:
        return self.add("GET", *handlers)

    def post(self, *handlers: Handler) -> RouteBuilder:
        return self.add("POST", *handlers)

    def put(self, *handlers: Handler) -> RouteBuilder:
        return self.add("PUT", *handlers)

    def patch(self, *handlers: Handler) -> RouteBuilder:
        return self.add("PATCH", *handlers)

    def delete(self, *handlers: Handler) -> RouteBuilder:
        return self.add("DELETE", *handlers)

    def head(self, *handlers: Handler) -> RouteBuilder:
        return self.add("HEAD", *handlers)

    def options(self, *handlers: Handler) -> RouteBuilder:
        return self.add("OPTIONS", *handlers)

    def all(self, *handlers: Handler) -> RouteBuilder:
        return self.add("*", *handlers)


class Router:
    """An ordered stack of routing layers.

    Usage::

        router = Router()
        router.use(cors)                        # interceptor at "/"
        router.use("/admin", require_admin)     # interceptor at "/admin"
        router.get("/users/:id", show_user)     # route
        router.use("/api", api_router)          # mount
    """

    __slots__ = ("_stack", "config")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config = config or RouterConfig()
        self._stack: list[Layer] = []

    @property
    def stack(self) -> tuple[Layer, ...]:
        """Registered layers in registration order."""
        return tuple(self._stack)

    # -- Registration --

    def use(self, *args: Any) -> Router:
        """Register interceptors or mount routers under a path prefix.

        The first argument may be a path string; without one the prefix
        is ``"/"``. Each following ``Router`` becomes a ``MountLayer``,
        every other callable an ``InterceptorLayer``.
        """
        path = "/"
        handlers = args
        if args and isinstance(args[0], str):
            path, handlers = args[0], args[1:]
        if not handlers:
            msg = f"Router.use({path!r}) requires at least one handler or router."
            raise ConfigurationError(msg)

        for handler in handlers:
            compiled = compile_path(
                path,
                end=False,
                strict=self.config.strict,
                case_sensitive=self.config.case_sensitive,
            )
            if isinstance(handler, Router):
                if handler is self:
                    msg = "A router cannot be mounted on itself."
                    raise ConfigurationError(msg)
                self._stack.append(MountLayer(compiled=compiled, router=handler))
            elif callable(handler):
                self._stack.append(InterceptorLayer(compiled=compiled, handler=handler))
            else:
                msg = f"Router.use() expects callables or routers, got {type(handler).__name__}."
                raise ConfigurationError(msg)
        return self

    def route(self, path: str) -> RouteBuilder:
        """Register a new route layer for *path* and return its builder."""
        compiled = compile_path(
            path,
            end=True,
            strict=self.config.strict,
            case_sensitive=self.config.case_sensitive,
        )
        methods: dict[str, tuple[Handler, ...]] = {}
        layer = RouteLayer(compiled=compiled, methods=methods)
        self._stack.append(layer)
        return RouteBuilder(layer, methods)

    def get(self, path: str, *handlers: Handler) -> RouteBuilder:
        return self.route(path).get(*handlers)

    def post(self, path: str, *handlers: Handler) -> RouteBuilder:
        return self.route(path).post(*handlers)

    def put(self, path: str, *handlers: Handler) -> RouteBuilder:
        return self.route(path).put(*handlers)

    def patch(self, path: str, *handlers: Handler) -> RouteBuilder:
        return self.route(path).patch(*handlers)

    def delete(self, path: str, *handlers: Handler) -> RouteBuilder:
        return self.route(path).delete(*handlers)

    def head(self, path: str, *handlers: Handler) -> RouteBuilder:
        return self.route(path).head(*handlers)

    def options(self, path: str, *handlers: Handler) -> RouteBuilder:
        return self.route(path).options(*handlers)

    def all(self, path: str, *handlers: Handler) -> RouteBuilder:
        return self.route(path).all(*handlers)

    # -- Dispatch --

    async def handle(self, request: Request) -> Response:
        """Run *request* through the stack and return the response.

        Raises ``NotFound`` when no layer produced a response, or
        ``MethodNotAllowed`` when a route matched the path but not the
        method. Exceptions raised by handlers propagate unchanged.
        """
        state = _Dispatch()

        async def finish(req: Request) -> Response:
            if state.allowed:
                raise MethodNotAllowed(frozenset(state.allowed))
            raise NotFound(f"No route matches {req.method} {req.path!r}")

        return await self._run(request, request.path, 0, finish, state)

    async def _run(
        self,
        request: Request,
        path: str,
        index: int,
        done: _Continue,
        state: _Dispatch,
    ) -> Response:
        """Try layers from *index* on; fall through to *done* when exhausted."""
        for position in range(index, len(self._stack)):
            layer = self._stack[position]
            found = layer.match(path)
            if found is None:
                continue

            async def proceed(req: Request, _next: int = position + 1) -> Response:
                return await self._run(req, path, _next, done, state)

            scoped = request.with_path_params(found.params) if found.params else request

            match layer:
                case RouteLayer():
                    chain = layer.chain_for(request.method)
                    if chain is None:
                        state.allowed.update(layer.allowed)
                        continue
                    return await _run_chain(chain, scoped, proceed)
                case MountLayer():
                    remaining = path[len(found.matched):]
                    if not remaining.startswith("/"):
                        remaining = "/" + remaining
                    return await layer.router._run(scoped, remaining, 0, proceed, state)
                case InterceptorLayer():
                    return negotiate(await invoke_layer_handler(layer.handler, scoped, proceed))

        return await done(request)


async def _run_chain(chain: tuple[Handler, ...], request: Request, exit: _Continue) -> Response:
    """Run a route's handler chain; the last ``next`` leaves the route."""

    async def step(index: int, req: Request) -> Response:
        if index == len(chain):
            return await exit(req)

        async def next_handler(next_req: Request) -> Response:
            return await step(index + 1, next_req)

        return negotiate(await invoke_layer_handler(chain[index], req, next_handler))

    return await step(0, request)

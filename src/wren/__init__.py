"""wren — layered request routing that documents itself as OpenAPI.

Declare each operation once, next to the handler it describes. The same
object validates incoming requests and feeds the generated document.

Basic usage::

    from wren import App, api_operation

    app = App()

    app.get("/labs/:lab", api_operation({
        "summary": "Show lab",
        "parameters": [{"in": "path", "name": "lab", "required": True,
                        "schema": {"type": "string", "minLength": 3}}],
    }), show_lab)

    app.serve_openapi()   # GET /openapi.json

Inspect from the shell::

    wren routes myapp:app
    wren paths myapp:app --paths-only
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "ConfigurationError",
    "HTTPError",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotFound",
    "OpenAPIConfig",
    "OpenAPIValidationError",
    "Request",
    "Response",
    "Router",
    "RouterConfig",
    "WrenError",
    "api_operation",
    "build_document",
    "create_paths",
    "decompile",
    "merge_operations",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "App": "wren.app",
    "ConfigurationError": "wren.errors",
    "HTTPError": "wren.errors",
    "MethodNotAllowed": "wren.errors",
    "Middleware": "wren.middleware.protocol",
    "Next": "wren.middleware.protocol",
    "NotFound": "wren.errors",
    "OpenAPIConfig": "wren.config",
    "OpenAPIValidationError": "wren.errors",
    "Request": "wren.http.request",
    "Response": "wren.http.response",
    "Router": "wren.routing.router",
    "RouterConfig": "wren.config",
    "WrenError": "wren.errors",
    "api_operation": "wren.openapi.operation",
    "build_document": "wren.openapi.document",
    "create_paths": "wren.openapi.paths",
    "decompile": "wren.openapi.decompile",
    "merge_operations": "wren.openapi.merge",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)

"""Full OpenAPI document assembly around the generated ``paths``."""

from typing import Any

from wren.config import OpenAPIConfig
from wren.openapi.paths import create_paths
from wren.routing.router import Router


def build_document(router: Router, config: OpenAPIConfig | None = None) -> dict[str, Any]:
    """Return a complete OpenAPI document for *router*.

    ``info`` and ``servers`` come from *config*; ``paths`` is generated
    from the router's layer tree::

        build_document(router, OpenAPIConfig(title="Labs API", version="1.2.0"))
        # {"openapi": "3.0.3", "info": {"title": "Labs API", "version": "1.2.0"},
        #  "paths": {...}}
    """
    config = config or OpenAPIConfig()
    info: dict[str, Any] = {"title": config.title, "version": config.version}
    if config.description:
        info["description"] = config.description

    document: dict[str, Any] = {"openapi": config.openapi_version, "info": info}
    if config.servers:
        document["servers"] = [{"url": url} for url in config.servers]
    document["paths"] = create_paths(router)
    return document

"""Router and OpenAPI configuration.

Both configs are frozen dataclasses and cannot change after creation.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Options for compiling every layer registered on a router.

    ``case_sensitive`` makes ``/Users`` and ``/users`` distinct paths.
    ``strict`` stops the optional trailing slash from being appended,
    so ``/users`` no longer matches ``/users/``.
    """

    case_sensitive: bool = False
    strict: bool = False


@dataclass(frozen=True, slots=True)
class OpenAPIConfig:
    """Document metadata and request validation settings.

    All fields have sensible defaults. Override what you need::

        config = OpenAPIConfig(title="Labs API", version="2.1.0")
    """

    # Document info
    title: str = "wren API"
    version: str = "0.1.0"
    openapi_version: str = "3.0.3"
    description: str = ""
    servers: tuple[str, ...] = ()

    # Validation
    validation_status: int = 400
    coerce_parameters: bool = True  # "42" satisfies {"type": "integer"} in path/query/header

    # Error boundary
    debug: bool = False

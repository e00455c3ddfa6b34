"""Target resolution for ``wren paths`` and ``wren routes``.

An import string names either an ``App`` or a bare ``Router``::

    myapp                 -> myapp.app
    myapp:api             -> myapp.api
    myapp.routes:v1.labs  -> attribute path below the module
    myapp:create_app      -> called when it is a factory
"""

import importlib
from functools import reduce

from wren.app import App
from wren.routing.router import Router


def resolve_app(import_string: str) -> App:
    """Resolve *import_string* to an App.

    A ``Router`` is mounted at ``/`` on a fresh App so both commands see
    the same shape. Any other callable is treated as a factory and
    called once without arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If an attribute along the path does not exist.
        TypeError: If the target is neither an App, a Router nor a
            factory returning one, or the factory itself fails.
    """
    module_path, _, attr_path = import_string.partition(":")
    module = importlib.import_module(module_path)
    target = reduce(getattr, (attr_path or "app").split("."), module)

    if callable(target) and not isinstance(target, App | Router):
        try:
            target = target()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(target, Router):
        return App().use(target)
    if not isinstance(target, App):
        msg = f"{import_string!r} resolved to {type(target).__name__}, not a wren.App instance or Router"
        raise TypeError(msg)
    return target

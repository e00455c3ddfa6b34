"""Operation merge rule.

Cascaded operations (an interceptor's descriptor, then the route's)
combine field by field. The overlay wins, except:

    tags        base + overlay, order kept, duplicates kept
    parameters  base + overlay, order kept, duplicates kept
    responses   union by status code, overlay wins per code
"""

from collections.abc import Mapping
from typing import Any

_CONCATENATED = ("tags", "parameters")


def merge_operations(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *overlay* onto *base* without mutating either.

    Example::

        merge_operations({"tags": ["A"]}, {"tags": ["B"]})
        # {"tags": ["A", "B"]}

        merge_operations(
            {"responses": {404: {"a": 1}}},
            {"responses": {404: {"b": 2}, 410: {"c": 3}}},
        )
        # {"responses": {404: {"b": 2}, 410: {"c": 3}}}
    """
    merged = {**base, **overlay}

    for key in _CONCATENATED:
        if key in overlay:
            merged[key] = [*base.get(key, ()), *overlay[key]]

    if "responses" in overlay:
        merged["responses"] = {**base.get("responses", {}), **overlay["responses"]}

    return merged

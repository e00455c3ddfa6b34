"""Testing utilities for wren applications.

Usage::

    from wren.testing import TestClient

    async with TestClient(app) as client:
        response = await client.get("/labs")
        assert response.status == 200
"""

from wren.testing.client import TestClient

__all__ = ["TestClient"]

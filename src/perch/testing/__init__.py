"""Testing utilities for perch applications.

Usage::

    from perch.testing import TestClient

    async def test_index():
        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 200
"""

from perch.testing.client import TestClient

__all__ = ["TestClient"]

"""Tests for the hello example."""

import pytest

from perch.testing import TestClient

pytestmark = pytest.mark.anyio


class TestHelloApp:
    """Verify every route in the hello example works through the ASGI pipeline."""

    async def test_index(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/")
            assert response.status == 200
            assert response.text == "Hello, World!"

    async def test_greet_with_slug(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/greet/alice")
            assert response.status == 200
            assert response.text == "Hello, alice!"

    async def test_greet_without_name(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/greet")
            assert response.status == 405
            assert response.header("allow") == ""

    async def test_custom_response_status_and_header(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/custom")
            assert response.status == 201
            assert response.text == "Created"
            assert ("x-custom", "perch") in response.headers

    async def test_custom_404_handler(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/nonexistent")
            assert response.status == 404
            assert response.text == "Nothing at /nonexistent"

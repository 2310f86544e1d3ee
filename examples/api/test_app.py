"""Tests for the api example."""

import json

import pytest

from perch.testing import TestClient

pytestmark = pytest.mark.anyio


class TestItemsAPI:
    async def test_empty_list(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/api/items")
            assert response.status == 200
            assert response.content_type == "application/json"
            assert json.loads(response.text) == []

    async def test_create_and_fetch(self, example_app) -> None:
        async with TestClient(example_app) as client:
            created = await client.post("/api/items", json={"title": "milk"})
            assert created.status == 201
            assert created.header("location") == "/api/items/1"

            fetched = await client.get("/api/items/1")
            assert json.loads(fetched.text) == {"id": 1, "title": "milk", "done": False}

    async def test_create_requires_title(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/api/items", json={})
            assert response.status == 422
            assert response.text == "title is required"

    async def test_invalid_json(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/api/items", body=b"{not json")
            assert response.status == 400
            assert response.text.startswith("Invalid JSON")

    async def test_update_and_filter(self, example_app) -> None:
        async with TestClient(example_app) as client:
            await client.post("/api/items", json={"title": "milk"})
            await client.post("/api/items", json={"title": "eggs"})
            await client.put("/api/items/2", body=json.dumps({"done": True}).encode())

            done = await client.get("/api/items/done")
            todo = await client.get("/api/items/open")
            assert [item["title"] for item in json.loads(done.text)] == ["eggs"]
            assert [item["title"] for item in json.loads(todo.text)] == ["milk"]

    async def test_delete(self, example_app) -> None:
        async with TestClient(example_app) as client:
            await client.post("/api/items", json={"title": "milk"})
            deleted = await client.delete("/api/items/1")
            assert deleted.status == 204
            missing = await client.get("/api/items/1")
            assert missing.status == 404
            assert missing.text == "Item 1 not found"

    async def test_non_numeric_id(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/api/items/abc")
            assert response.status == 404

    async def test_method_not_allowed(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.put("/api/items")
            assert response.status == 405
            assert response.header("allow") == "GET, POST"

"""Tests for roost.testing — the in-memory REST backend."""

import httpx
import pytest

from roost.testing import BASE_URL, MemoryBackend


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


class TestMemoryBackend:
    async def test_post_assigns_id(self, backend: MemoryBackend) -> None:
        async with backend.client() as client:
            response = await client.post("/widget", json={"name": "a"})
        assert response.status_code == 201
        assert response.json() == {"name": "a", "id": 1}
        assert backend.collections["/widget"]["1"] == {"name": "a", "id": 1}

    async def test_post_keeps_given_id(self, backend: MemoryBackend) -> None:
        async with backend.client() as client:
            response = await client.post("/widget", json={"id": "abc"})
        assert response.json()["id"] == "abc"

    async def test_get_unknown_collection_is_empty(self, backend: MemoryBackend) -> None:
        async with backend.client() as client:
            response = await client.get("/nothing")
        assert response.json() == []

    async def test_get_unknown_item_404(self, backend: MemoryBackend) -> None:
        backend.seed("/widget", [{"name": "a"}])
        async with backend.client() as client:
            response = await client.get("/widget/99")
        assert response.status_code == 404

    async def test_get_unknown_item_on_fresh_backend_404(self, backend: MemoryBackend) -> None:
        async with backend.client() as client:
            response = await client.get("/widget/99")
        assert response.status_code == 404

    async def test_unseeded_nested_collection_is_empty(self, backend: MemoryBackend) -> None:
        async with backend.client() as client:
            response = await client.get("/users/7/timesheets")
        assert response.json() == []

    async def test_put_unknown_item_404(self, backend: MemoryBackend) -> None:
        async with backend.client() as client:
            response = await client.put("/widget/5", json={"name": "x"})
        assert response.status_code == 404

    async def test_patch_merges(self, backend: MemoryBackend) -> None:
        backend.seed("/widget", [{"id": 1, "name": "a", "size": 2}])
        async with backend.client() as client:
            response = await client.patch("/widget/1", json={"size": 5})
        assert response.json() == {"id": 1, "name": "a", "size": 5}

    async def test_put_replaces_and_keeps_id(self, backend: MemoryBackend) -> None:
        backend.seed("/widget", [{"id": 1, "name": "a", "size": 2}])
        async with backend.client() as client:
            response = await client.put("/widget/1", json={"id": 42, "name": "b"})
        assert response.json() == {"id": 1, "name": "b"}

    async def test_delete(self, backend: MemoryBackend) -> None:
        backend.seed("/widget", [{"id": 1}])
        async with backend.client() as client:
            response = await client.delete("/widget/1")
        assert response.status_code == 204
        assert backend.collections["/widget"] == {}

    async def test_records_requests(self, backend: MemoryBackend) -> None:
        async with backend.client() as client:
            await client.get("/a")
            await client.get("/b")
        assert [str(r.url) for r in backend.requests] == [f"{BASE_URL}/a", f"{BASE_URL}/b"]

    def test_factory_uses_mock_transport(self, backend: MemoryBackend) -> None:
        factory = backend.factory()
        assert isinstance(factory.client, httpx.AsyncClient)
        assert factory.config.base_url == BASE_URL

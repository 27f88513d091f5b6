"""In-memory REST backend for testing registries and dispatchers.

Serves JSON collections through ``httpx.MockTransport`` so the shipped
httpx client runs unmodified, with no network involved.

Usage::

    backend = MemoryBackend()
    registry = Registry(backend.factory()).add("widget")
    dispatcher = Dispatcher(registry)

    created = await dispatcher.create("widget", {"name": "sprocket"})
    assert backend.requests[-1].method == "POST"

Any path is a collection unless it ends in a numeric id or sits under a
collection that holds items; ``<collection>/<id>`` addresses one item.
POST assigns an integer id when the body has none. Unknown items answer
404. Query parameters on a collection GET filter by field equality.
"""

import itertools
import json
from typing import Any

import httpx

from roost.config import ClientConfig
from roost.http.client import HttpxEndpointFactory

BASE_URL = "http://roost.test"


class MemoryBackend:
    """A dict of collections behind an ``httpx.MockTransport``."""

    __slots__ = ("_ids", "collections", "id_field", "requests")

    def __init__(self, *, id_field: str = "id") -> None:
        self.id_field = id_field
        self.collections: dict[str, dict[str, dict[str, Any]]] = {}
        self.requests: list[httpx.Request] = []
        self._ids = itertools.count(1)

    # -- Wiring -----------------------------------------------------------

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def client(self, base_url: str = BASE_URL) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=base_url, transport=self.transport)

    def factory(self, base_url: str = BASE_URL) -> HttpxEndpointFactory:
        return HttpxEndpointFactory(ClientConfig(base_url=base_url), client=self.client(base_url))

    def seed(self, collection: str, items: list[dict[str, Any]]) -> None:
        """Store *items* under *collection*, assigning ids where missing."""
        store = self.collections.setdefault(_normalize(collection), {})
        for item in items:
            item = dict(item)
            item.setdefault(self.id_field, next(self._ids))
            store[str(item[self.id_field])] = item

    # -- Request handling -------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = _normalize(request.url.path)
        parent, _, item_id = path.rpartition("/")
        parent = parent or "/"
        method = request.method

        if method == "POST":
            return self._create(path, _body(request))

        if method == "GET" and not self._addresses_item(path, parent, item_id):
            items = self.collections.get(path, {}).values()
            filters = dict(request.url.params)
            matched = [i for i in items if all(str(i.get(k)) == v for k, v in filters.items())]
            return httpx.Response(200, json=matched)

        item = self.collections.get(parent, {}).get(item_id)
        if item is None:
            return httpx.Response(404, json={"detail": f"{path} not found"})

        if method == "GET":
            return httpx.Response(200, json=item)
        if method in ("PUT", "PATCH"):
            body = _body(request)
            updated = body if method == "PUT" else {**item, **body}
            updated[self.id_field] = item[self.id_field]
            self.collections[parent][item_id] = updated
            return httpx.Response(200, json=updated)
        if method == "DELETE":
            del self.collections[parent][item_id]
            return httpx.Response(204)
        return httpx.Response(405, json={"detail": f"{method} not allowed"})

    def _addresses_item(self, path: str, parent: str, item_id: str) -> bool:
        # Known collections win; otherwise an item sits under a known
        # collection or is addressed by a numeric id
        if path in self.collections:
            return False
        return parent in self.collections or item_id.isdigit()

    def _create(self, collection: str, body: dict[str, Any]) -> httpx.Response:
        item = dict(body)
        if item.get(self.id_field) is None:
            item[self.id_field] = next(self._ids)
        self.collections.setdefault(collection, {})[str(item[self.id_field])] = item
        return httpx.Response(201, json=item)


def _normalize(path: str) -> str:
    return "/" + path.strip("/")


def _body(request: httpx.Request) -> dict[str, Any]:
    if not request.content:
        return {}
    return json.loads(request.content)

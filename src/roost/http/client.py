"""HTTP capability behind every resource handle.

The registry needs one thing from an HTTP client: given a URL template,
a parameter map and a set of action verbs, produce an endpoint that can
query a collection, fetch one item, save a new instance, remove one,
and invoke any action verb. ``EndpointFactory`` and ``Endpoint`` describe
that shape; any object providing it can be passed to ``Registry``.

``HttpxEndpointFactory`` is the implementation that ships with roost.
It talks JSON over a shared ``httpx.AsyncClient``::

    factory = HttpxEndpointFactory(ClientConfig(base_url="https://api.example.com"))
    registry = Registry(factory)
    ...
    await factory.aclose()

Status codes are not interpreted beyond success/failure: a non-2xx
response raises ``ResponseError`` and network errors raised by httpx
propagate unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from roost.config import ClientConfig
from roost.descriptor import VerbConfig
from roost.errors import ConfigurationError, MalformedResponseError, ResponseError
from roost.urls import bind_params, build_url

logger = logging.getLogger("roost.http")


class Endpoint(Protocol):
    """A callable endpoint bound to one resource's URL template."""

    async def query(self, params: Mapping[str, Any] | None = None) -> list[Any]: ...

    async def fetch(self, params: Mapping[str, Any] | None = None) -> Any: ...

    async def save(self, data: Mapping[str, Any], params: Mapping[str, Any] | None = None) -> Any: ...

    async def remove(self, data: Mapping[str, Any], params: Mapping[str, Any] | None = None) -> Any: ...

    async def invoke(
        self,
        verb: str,
        data: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any: ...


class EndpointFactory(Protocol):
    """Builds an ``Endpoint`` from an expanded resource configuration."""

    def __call__(
        self,
        url: str,
        params: Mapping[str, Any],
        actions: Mapping[str, VerbConfig],
    ) -> Endpoint: ...


# Verbs every endpoint supports regardless of its action set
STANDARD_VERBS: dict[str, VerbConfig] = {
    "query": VerbConfig("GET", is_array=True),
    "fetch": VerbConfig("GET"),
    "save": VerbConfig("POST"),
    "remove": VerbConfig("DELETE"),
}


class HttpxEndpoint:
    """``Endpoint`` implementation issuing JSON requests through httpx."""

    __slots__ = ("_actions", "_factory", "_params", "_url")

    def __init__(
        self,
        factory: HttpxEndpointFactory,
        url: str,
        params: Mapping[str, Any],
        actions: Mapping[str, VerbConfig],
    ) -> None:
        self._factory = factory
        self._url = url
        self._params = params
        self._actions = actions

    @property
    def url(self) -> str:
        return self._url

    async def query(self, params: Mapping[str, Any] | None = None) -> list[Any]:
        return await self._request(STANDARD_VERBS["query"], None, params)

    async def fetch(self, params: Mapping[str, Any] | None = None) -> Any:
        return await self._request(STANDARD_VERBS["fetch"], None, params)

    async def save(self, data: Mapping[str, Any], params: Mapping[str, Any] | None = None) -> Any:
        return await self._request(STANDARD_VERBS["save"], data, params)

    async def remove(self, data: Mapping[str, Any], params: Mapping[str, Any] | None = None) -> Any:
        return await self._request(STANDARD_VERBS["remove"], data, params)

    async def invoke(
        self,
        verb: str,
        data: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        config = self._actions.get(verb)
        if config is None:
            msg = f"No {verb!r} action on {self._url!r}"
            raise ConfigurationError(msg)
        return await self._request(config, data, params)

    async def _request(
        self,
        verb: VerbConfig,
        data: Mapping[str, Any] | None,
        params: Mapping[str, Any] | None,
    ) -> Any:
        # Bindings come from the payload, explicit params win
        values = bind_params({**self._params, **verb.params}, data)
        values.update(params or {})
        url, query = build_url(verb.url or self._url, values)
        return await self._factory.send(
            verb.method,
            url,
            query=query,
            body=data if verb.has_body else None,
            is_array=verb.is_array,
        )


class HttpxEndpointFactory:
    """``EndpointFactory`` backed by a shared ``httpx.AsyncClient``.

    The client is created on first use from *config* unless one is
    supplied (e.g. one wired to ``httpx.MockTransport`` in tests). Only
    a client created here is closed by ``aclose()``.
    """

    __slots__ = ("_client", "_owns_client", "config")

    def __init__(
        self,
        config: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self._client = client
        self._owns_client = client is None

    def __call__(
        self,
        url: str,
        params: Mapping[str, Any],
        actions: Mapping[str, VerbConfig],
    ) -> HttpxEndpoint:
        return HttpxEndpoint(self, url, params, actions)

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                headers=dict(self.config.headers),
                follow_redirects=self.config.follow_redirects,
            )
        return self._client

    async def send(
        self,
        method: str,
        url: str,
        *,
        query: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
        is_array: bool = False,
    ) -> Any:
        """Issue one request and decode the JSON response.

        Raises ``ResponseError`` on a non-2xx status and
        ``MalformedResponseError`` when the body is not a JSON array
        (array verbs) or object (everything else). An empty body decodes
        to ``{}``.
        """
        logger.debug("%s %s", method, url)
        response = await self.client.request(
            method,
            url,
            params=dict(query) if query else None,
            json=dict(body) if body is not None else None,
        )
        logger.debug("%s %s -> %d", method, url, response.status_code)

        if not response.is_success:
            raise ResponseError(
                status=response.status_code,
                detail=response.text,
                method=method,
                url=str(response.request.url),
            )

        if not response.content:
            return [] if is_array else {}
        try:
            payload = response.json()
        except ValueError as exc:
            msg = f"{method} {url} returned a non-JSON body"
            raise MalformedResponseError(msg) from exc

        if is_array and not isinstance(payload, list):
            msg = f"{method} {url} expected a JSON array, got {type(payload).__name__}"
            raise MalformedResponseError(msg)
        if not is_array and isinstance(payload, list):
            msg = f"{method} {url} expected a JSON object, got a list"
            raise MalformedResponseError(msg)
        return payload

    async def aclose(self) -> None:
        """Close the underlying client if this factory created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpxEndpointFactory:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

"""Resource registry — named, expanded resource handles.

Mirrors the ``ToolRegistry`` pattern: ``EndpointSpec`` is the frozen
definition, ``ResourceHandle`` binds it to an endpoint, and ``Registry``
is the lookup table keyed by resource name.

The registry is an explicit value owned by the composition root and
handed to whatever builds the ``Dispatcher``. Writes happen only through
``add()`` during setup; dispatch only reads.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from roost.config import DEFAULTS, ClientConfig, DefaultConfig
from roost.descriptor import EndpointSpec, ResourceDescriptor, coerce_descriptor, expand
from roost.errors import ConfigurationError, DuplicateResourceError, NotFoundError
from roost.http.client import Endpoint, EndpointFactory, HttpxEndpointFactory

logger = logging.getLogger("roost.registry")

STANDARD_VERBS = ("list", "get", "create", "remove")

Descriptor = str | Mapping[str, Any] | ResourceDescriptor


class ResourceHandle:
    """The callable binding for one registered resource.

    Standard verbs go straight to the endpoint; ``update`` and any other
    action verb are looked up in the resource's verb set.
    """

    __slots__ = ("endpoint", "spec")

    def __init__(self, spec: EndpointSpec, endpoint: Endpoint) -> None:
        self.spec = spec
        self.endpoint = endpoint

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def verbs(self) -> tuple[str, ...]:
        """Standard verbs followed by the resource's action verbs."""
        return STANDARD_VERBS + tuple(v for v in self.spec.actions if v not in STANDARD_VERBS)

    async def list(self, query: Mapping[str, Any] | None = None) -> list[Any]:
        return await self.endpoint.query(query)

    async def get(self, query: Mapping[str, Any] | None = None) -> Any:
        return await self.endpoint.fetch(query)

    async def create(self, model: Mapping[str, Any]) -> Any:
        return await self.endpoint.save(model)

    async def update(self, model: Mapping[str, Any]) -> Any:
        return await self.call("update", model)

    async def remove(self, model: Mapping[str, Any]) -> Any:
        return await self.endpoint.remove(model)

    async def call(
        self,
        verb: str,
        payload: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Invoke an action verb from the resource's verb set.

        Raises ``ConfigurationError`` if the verb is not in the set.
        """
        if verb not in self.spec.actions:
            msg = (
                f"Resource {self.name!r} has no {verb!r} verb. "
                f"Available: {', '.join(self.spec.actions) or 'none'}"
            )
            raise ConfigurationError(msg)
        return await self.endpoint.invoke(verb, payload, params)

    def __repr__(self) -> str:
        return f"<ResourceHandle {self.name!r} {self.spec.url!r}>"


class Registry:
    """Name → ``ResourceHandle`` table built from descriptors.

    ``add()`` returns the registry so registrations chain::

        registry = (
            Registry(factory)
            .add("timesheet")
            .add({"name": "timesheets",
                  "url": "/users/:user_id/timesheets",
                  "params": {"user_id": "@user_id"}})
        )

    Registering a name twice raises ``DuplicateResourceError`` unless the
    call passes ``override=True`` or the registry was created with
    ``allow_override=True``.

    Without a *factory* the registry builds an ``HttpxEndpointFactory``
    from ``ClientConfig.from_env()`` and owns it: ``aclose()`` (or
    ``async with Registry() as registry``) closes its HTTP client. A
    factory passed in stays the caller's to close.
    """

    __slots__ = ("_allow_override", "_factory", "_handles", "_owns_factory", "defaults")

    def __init__(
        self,
        factory: EndpointFactory | None = None,
        *,
        defaults: DefaultConfig = DEFAULTS,
        allow_override: bool = False,
    ) -> None:
        self._owns_factory = factory is None
        self._factory: EndpointFactory = factory or HttpxEndpointFactory(ClientConfig.from_env())
        self._handles: dict[str, ResourceHandle] = {}
        self._allow_override = allow_override
        self.defaults = defaults

    @property
    def factory(self) -> EndpointFactory:
        return self._factory

    async def aclose(self) -> None:
        """Close the default factory's HTTP client, if this registry built it."""
        if self._owns_factory:
            await self._factory.aclose()

    async def __aenter__(self) -> Registry:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    def add(self, descriptor: Descriptor, *, override: bool = False) -> Registry:
        """Expand *descriptor* and store its handle under the resource name.

        Raises ``ConfigurationError`` for an invalid descriptor and
        ``DuplicateResourceError`` when the name is taken and overriding
        was not requested.
        """
        spec = expand(coerce_descriptor(descriptor), self.defaults)

        if spec.name in self._handles:
            if not (override or self._allow_override):
                raise DuplicateResourceError(spec.name)
            logger.warning("Replacing resource %r (%s)", spec.name, spec.url)

        endpoint = self._factory(spec.url, spec.params, spec.actions)
        self._handles[spec.name] = ResourceHandle(spec, endpoint)
        logger.debug(
            "Registered resource %r: %s params=%s verbs=%s",
            spec.name,
            spec.url,
            dict(spec.params),
            list(spec.actions),
        )
        return self

    def add_all(self, descriptors: Iterable[Descriptor], *, override: bool = False) -> Registry:
        """Register every descriptor in order."""
        for descriptor in descriptors:
            self.add(descriptor, override=override)
        return self

    def get(self, name: str) -> ResourceHandle:
        """Return the handle for *name*. Raises ``NotFoundError`` if absent."""
        handle = self._handles.get(name)
        if handle is None:
            raise NotFoundError(name)
        return handle

    def names(self) -> tuple[str, ...]:
        return tuple(self._handles)

    def specs(self) -> tuple[EndpointSpec, ...]:
        return tuple(h.spec for h in self._handles.values())

    def __iter__(self) -> Iterator[ResourceHandle]:
        return iter(tuple(self._handles.values()))

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, name: object) -> bool:
        return name in self._handles

    def __repr__(self) -> str:
        return f"<Registry {list(self._handles)!r}>"

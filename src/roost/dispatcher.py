"""Uniform dispatch — five verbs over every registered resource.

Each verb looks the resource up in the registry, starts the request as
an ``asyncio.Task`` on the running loop, and hands the task back
without waiting for it::

    dispatcher = Dispatcher(registry)
    task = dispatcher.get("timesheet", {"id": 7})
    timesheet = await task

An unregistered name raises ``ConfigurationError`` immediately, before
any request is built. Everything after that (status codes, network
failures, cancellation) travels through the task unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine, Mapping
from typing import Any

from roost.errors import ConfigurationError, NotFoundError
from roost.registry import Registry, ResourceHandle

logger = logging.getLogger("roost.dispatch")

VERBS = ("list", "get", "create", "update", "remove")


class Dispatcher:
    """Facade mapping generic verbs onto registered resource handles."""

    __slots__ = ("registry",)

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    def list(self, resource: str, query: Mapping[str, Any] | None = None) -> asyncio.Task[list[Any]]:
        """Read a collection, filtered by *query*."""
        return self.dispatch("list", resource, query or {})

    def get(self, resource: str, query: Mapping[str, Any] | None = None) -> asyncio.Task[Any]:
        """Read one item addressed by *query*."""
        return self.dispatch("get", resource, query or {})

    def create(self, resource: str, model: Mapping[str, Any]) -> asyncio.Task[Any]:
        """Create an item from *model*; resolves to the stored representation."""
        return self.dispatch("create", resource, model)

    def update(self, resource: str, model: Mapping[str, Any]) -> asyncio.Task[Any]:
        """Replace the item identified by *model*'s id with *model*."""
        return self.dispatch("update", resource, model)

    def remove(self, resource: str, model: Mapping[str, Any]) -> asyncio.Task[Any]:
        """Delete the item identified by *model*'s id."""
        return self.dispatch("remove", resource, model)

    def dispatch(self, verb: str, resource: str, payload: Mapping[str, Any]) -> asyncio.Task[Any]:
        """Start *verb* on *resource* and return the pending task.

        Raises ``ConfigurationError`` for an unknown verb or resource and
        ``RuntimeError`` when no event loop is running. Neither case
        builds a request.
        """
        if verb not in VERBS:
            msg = f"Unknown verb {verb!r}. Expected one of: {', '.join(VERBS)}"
            raise ConfigurationError(msg)
        handle = self._lookup(resource)
        loop = asyncio.get_running_loop()

        logger.debug("dispatch %s %r", verb, resource)
        coro: Coroutine[Any, Any, Any] = getattr(handle, verb)(payload)
        return loop.create_task(coro, name=f"roost:{verb}:{resource}")

    def _lookup(self, resource: str) -> ResourceHandle:
        try:
            return self.registry.get(resource)
        except NotFoundError:
            msg = (
                f"Resource {resource!r} is not registered. "
                f"Registered: {', '.join(self.registry.names()) or 'none'}"
            )
            raise ConfigurationError(msg) from None

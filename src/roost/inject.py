"""Lazy injection — dispatcher calls bound now, issued at activation.

Routing layers often want data loaded when a route or state activates,
not when its module is imported. ``resolve()`` produces a small closure
that records *what* to call; the dispatcher itself is only requested
from the ``Injector`` when the closure runs::

    injector = Injector()
    injector.provide(Dispatcher, lambda: Dispatcher(registry))

    bindings = {
        "timesheets": resolve("list", "timesheets", lambda p: {"user_id": p["user_id"]}),
        "user": resolve("get", "users", lambda p: {"id": p["user_id"]}),
    }

    # later, on activation
    data = await resolve_all(bindings, injector, params={"user_id": 7})
    data["timesheets"], data["user"]

Resolution priority for each parameter of a bound callable:

1. Activation context — keyword arguments passed to ``resolve_all()``
2. Service providers — registered via ``Injector.provide()``
3. The parameter's own default
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable, Mapping
from typing import Any

import anyio

from roost.dispatcher import VERBS, Dispatcher
from roost.errors import ConfigurationError

Payload = Mapping[str, Any] | Callable[[Mapping[str, Any]], Mapping[str, Any]] | None


class Injector:
    """Type-keyed provider table consulted when a binding runs."""

    __slots__ = ("_providers",)

    def __init__(self) -> None:
        self._providers: dict[type, Callable[[], Any]] = {}

    def provide(self, annotation: type, factory: Callable[[], Any]) -> None:
        """Register a zero-argument *factory* for parameters typed *annotation*."""
        self._providers[annotation] = factory

    def get(self, annotation: type) -> Any:
        """Build the service registered for *annotation*.

        Raises ``ConfigurationError`` if nothing provides it.
        """
        factory = self._providers.get(annotation)
        if factory is None:
            name = getattr(annotation, "__name__", repr(annotation))
            msg = f"No provider registered for {name}"
            raise ConfigurationError(msg)
        return factory()

    def __contains__(self, annotation: object) -> bool:
        return annotation in self._providers

    def call(self, func: Callable[..., Any], /, **context: Any) -> Any:
        """Call *func* with arguments drawn from *context* and the providers.

        Raises ``ConfigurationError`` for a required parameter that no
        source can fill.
        """
        sig = inspect.signature(func, eval_str=True)
        kwargs: dict[str, Any] = {}

        for name, param in sig.parameters.items():
            if name in context:
                kwargs[name] = context[name]
            elif param.annotation is not inspect.Parameter.empty and param.annotation in self._providers:
                kwargs[name] = self.get(param.annotation)
            elif param.default is inspect.Parameter.empty:
                func_name = getattr(func, "__name__", repr(func))
                msg = f"Cannot inject parameter {name!r} of {func_name}"
                raise ConfigurationError(msg)

        return func(**kwargs)


def resolve(verb: str, resource: str, payload: Payload = None) -> Callable[..., asyncio.Task[Any]]:
    """Bind a dispatcher call for later activation.

    *payload* is a mapping, or a callable receiving the activation
    ``params`` and returning one. The verb is checked here; the
    resource is checked when the returned resolver runs.
    """
    if verb not in VERBS:
        msg = f"Unknown verb {verb!r}. Expected one of: {', '.join(VERBS)}"
        raise ConfigurationError(msg)

    def resolver(
        dispatcher: Dispatcher,
        params: Mapping[str, Any] | None = None,
    ) -> asyncio.Task[Any]:
        body = payload(params or {}) if callable(payload) else payload
        return dispatcher.dispatch(verb, resource, body or {})

    resolver.__name__ = f"resolve_{verb}_{resource}"
    return resolver


async def resolve_all(
    bindings: Mapping[str, Callable[..., Any]],
    injector: Injector,
    /,
    **context: Any,
) -> dict[str, Any]:
    """Run every binding concurrently and collect the results by key.

    Bindings may return awaitables or plain values. A failure cancels the
    remaining bindings; a single failure is re-raised as-is, several
    surface together as an exception group.
    """
    resolved: dict[str, Any] = {}

    async def _resolve(key: str, binding: Callable[..., Any]) -> None:
        result = injector.call(binding, **context)
        if inspect.isawaitable(result):
            result = await result
        resolved[key] = result

    try:
        async with anyio.create_task_group() as tg:
            for key, binding in bindings.items():
                tg.start_soon(_resolve, key, binding)
    except BaseExceptionGroup as group:
        if len(group.exceptions) == 1:
            raise group.exceptions[0] from None
        raise

    return {key: resolved[key] for key in bindings}

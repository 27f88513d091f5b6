"""Roost — REST resources from short descriptors, called through five verbs.

Describe resources once, tersely; conventions fill in the id path
segment and the update verb::

    from roost import Dispatcher, Registry

    registry = (
        Registry()
        .add("timesheet")                       # /timesheet/:id
        .add({"name": "timesheets",             # /users/:user_id/timesheets/:id
              "url": "/users/:user_id/timesheets",
              "params": {"user_id": "@user_id"}})
    )
    api = Dispatcher(registry)

    sheets = await api.list("timesheets", {"user_id": 7})
    await api.update("timesheet", {"id": 3, "hours": 8})

Lazy injection for routing layers::

    from roost import Injector, resolve, resolve_all
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "DEFAULTS",
    "ClientConfig",
    "ConfigurationError",
    "DefaultConfig",
    "Dispatcher",
    "DuplicateResourceError",
    "EndpointSpec",
    "HttpxEndpointFactory",
    "MalformedResponseError",
    "Injector",
    "NotFoundError",
    "Registry",
    "ResourceDescriptor",
    "ResourceHandle",
    "ResponseError",
    "RoostError",
    "TransportError",
    "VERBS",
    "VerbConfig",
    "resolve",
    "resolve_all",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast and free of httpx until a registry is built.
    """
    if name in ("Registry", "ResourceHandle"):
        import roost.registry

        return getattr(roost.registry, name)

    if name in ("Dispatcher", "VERBS"):
        import roost.dispatcher

        return getattr(roost.dispatcher, name)

    if name in ("Injector", "resolve", "resolve_all"):
        import roost.inject

        return getattr(roost.inject, name)

    if name in ("DEFAULTS", "ClientConfig", "DefaultConfig"):
        import roost.config

        return getattr(roost.config, name)

    if name in ("EndpointSpec", "ResourceDescriptor", "VerbConfig"):
        import roost.descriptor

        return getattr(roost.descriptor, name)

    if name == "HttpxEndpointFactory":
        from roost.http.client import HttpxEndpointFactory

        return HttpxEndpointFactory

    if name in (
        "ConfigurationError",
        "DuplicateResourceError",
        "MalformedResponseError",
        "NotFoundError",
        "ResponseError",
        "RoostError",
        "TransportError",
    ):
        import roost.errors

        return getattr(roost.errors, name)

    msg = f"module 'roost' has no attribute {name!r}"
    raise AttributeError(msg)

"""Resource descriptors and their expansion into endpoint specs.

A descriptor is the terse form an application writes::

    registry.add("widget")
    registry.add({"name": "timesheets",
                  "url": "/users/:user_id/timesheets",
                  "params": {"user_id": "@user_id"}})

``expand()`` turns it into an ``EndpointSpec`` by applying the
conventions in ``DefaultConfig``: the id placeholder is appended to the
URL, the id parameter binding is merged under the caller's params, and
the default action set is used when the descriptor names none.
Unconventional descriptors skip all of that and are used verbatim.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from roost.errors import ConfigurationError

if TYPE_CHECKING:
    from roost.config import DefaultConfig

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

# Mapping keys accepted by coerce_descriptor(), with their camelCase aliases
_DESCRIPTOR_KEYS: dict[str, str] = {
    "name": "name",
    "url": "url",
    "urlTemplate": "url",
    "params": "params",
    "paramMap": "params",
    "actions": "actions",
    "methodOverrides": "actions",
    "unconventional": "unconventional",
}


@dataclass(frozen=True, slots=True)
class VerbConfig:
    """How one action verb maps onto HTTP.

    ``has_body`` defaults to ``True`` for POST, PUT and PATCH. ``url`` and
    ``params`` override the resource's template and extend its bindings
    for this verb only.
    """

    method: str
    is_array: bool = False
    has_body: bool | None = None
    url: str | None = None
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        if self.has_body is None:
            object.__setattr__(self, "has_body", self.method in BODY_METHODS)

    @classmethod
    def coerce(cls, value: str | Mapping[str, Any] | VerbConfig) -> VerbConfig:
        """Accept ``"PUT"``, ``{"method": "PUT", "isArray": False}`` or a VerbConfig."""
        if isinstance(value, VerbConfig):
            return value
        if isinstance(value, str):
            return cls(value)
        if isinstance(value, Mapping):
            if "method" not in value:
                msg = f"Verb config needs a 'method': {dict(value)!r}"
                raise ConfigurationError(msg)
            return cls(
                method=value["method"],
                is_array=bool(value.get("is_array", value.get("isArray", False))),
                has_body=value.get("has_body", value.get("hasBody")),
                url=value.get("url"),
                params=dict(value.get("params") or {}),
            )
        msg = f"Cannot build a verb config from {type(value).__name__}"
        raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class ResourceDescriptor:
    """Caller-supplied configuration for one resource.

    Transient: consumed by ``Registry.add()`` and not kept afterwards.
    """

    name: str
    url: str | None = None
    params: Mapping[str, Any] | None = None
    actions: Mapping[str, VerbConfig] | None = None
    unconventional: bool = False


@dataclass(frozen=True, slots=True)
class EndpointSpec:
    """The fully expanded configuration of one resource."""

    name: str
    url: str
    params: Mapping[str, Any]
    actions: Mapping[str, VerbConfig]
    unconventional: bool = False


def coerce_descriptor(value: str | Mapping[str, Any] | ResourceDescriptor) -> ResourceDescriptor:
    """Normalize registration input into a ``ResourceDescriptor``.

    A bare string ``"widget"`` is shorthand for
    ``ResourceDescriptor(name="widget", url="/widget")``.
    """
    if isinstance(value, ResourceDescriptor):
        descriptor = value
    elif isinstance(value, str):
        descriptor = ResourceDescriptor(name=value, url=f"/{value}")
    elif isinstance(value, Mapping):
        kwargs: dict[str, Any] = {}
        seen: dict[str, str] = {}
        for key, item in value.items():
            target = _DESCRIPTOR_KEYS.get(key)
            if target is None:
                msg = f"Unknown descriptor key {key!r} for resource {value.get('name')!r}"
                raise ConfigurationError(msg)
            if target in seen:
                msg = (
                    f"Descriptor keys {seen[target]!r} and {key!r} both set {target!r} "
                    f"for resource {value.get('name')!r}"
                )
                raise ConfigurationError(msg)
            seen[target] = key
            kwargs[target] = item
        if "name" not in kwargs:
            msg = f"Resource descriptor needs a 'name': {dict(value)!r}"
            raise ConfigurationError(msg)
        descriptor = ResourceDescriptor(**kwargs)
    else:
        msg = f"Cannot register a resource from {type(value).__name__}"
        raise ConfigurationError(msg)

    if not isinstance(descriptor.name, str) or not descriptor.name.strip():
        msg = f"Resource name must be a non-empty string, got {descriptor.name!r}"
        raise ConfigurationError(msg)
    return descriptor


def _coerce_actions(actions: Mapping[str, Any]) -> Mapping[str, VerbConfig]:
    return MappingProxyType({verb: VerbConfig.coerce(cfg) for verb, cfg in actions.items()})


def expand(descriptor: ResourceDescriptor, defaults: DefaultConfig) -> EndpointSpec:
    """Expand a descriptor into an ``EndpointSpec``.

    Conventional descriptors get ``/:<id>`` appended to their URL (which
    defaults to ``/<name>``) and the default id bindings merged under
    their own params, caller keys winning. Unconventional descriptors
    must supply both ``url`` and ``params``; they are used unmodified.

    Raises ``ConfigurationError`` for an unconventional descriptor
    missing either field.
    """
    if descriptor.unconventional:
        missing = [f for f in ("url", "params") if getattr(descriptor, f) is None]
        if missing:
            msg = (
                f"Resource {descriptor.name!r} is unconventional and must "
                f"supply {' and '.join(missing)} explicitly"
            )
            raise ConfigurationError(msg)
        url = descriptor.url
        params = dict(descriptor.params)
    else:
        url = descriptor.url if descriptor.url is not None else f"/{descriptor.name}"
        for key in defaults.id_params:
            url = f"{url}/:{key}"
        params = {**defaults.id_params, **(descriptor.params or {})}

    actions = descriptor.actions if descriptor.actions is not None else defaults.actions

    return EndpointSpec(
        name=descriptor.name,
        url=url,
        params=MappingProxyType(params),
        actions=_coerce_actions(actions),
        unconventional=descriptor.unconventional,
    )

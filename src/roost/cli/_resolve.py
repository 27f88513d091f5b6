"""Load the registry a CLI command operates on.

The target is ``"module:attribute"`` (attribute defaults to
``registry``). It may name a ``Registry`` or a list/tuple of resource
descriptors; descriptors are expanded into a fresh ``Registry`` with the
default conventions, which is enough for inspection commands that never
send a request.
"""

import importlib
from collections.abc import Mapping

from roost.descriptor import ResourceDescriptor
from roost.registry import Registry


def resolve_registry(target: str) -> Registry:
    """Return the ``Registry`` that *target* points at.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the attribute is neither a registry nor descriptors.
        ConfigurationError: If a descriptor in the list is invalid.
    """
    module_path, _, attr_name = target.partition(":")
    obj = getattr(importlib.import_module(module_path), attr_name or "registry")

    if isinstance(obj, Registry):
        return obj
    if isinstance(obj, list | tuple) and all(
        isinstance(d, str | Mapping | ResourceDescriptor) for d in obj
    ):
        return Registry().add_all(obj)

    msg = f"{target!r} is a {type(obj).__name__}; expected a Registry or a list of descriptors"
    raise TypeError(msg)

"""Registry conventions and client configuration.

Both are frozen dataclasses — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from roost.descriptor import VerbConfig


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True, slots=True)
class DefaultConfig:
    """Conventions applied to every descriptor not marked unconventional.

    ``id_params`` is merged under the caller's params and each of its keys
    becomes a trailing ``/:key`` path segment. ``actions`` is the verb set
    used when a descriptor supplies none of its own::

        DefaultConfig(
            id_params={"id": "@id"},
            actions={"update": VerbConfig("PUT")},
        )
    """

    id_params: Mapping[str, str] = field(
        default_factory=lambda: _frozen({"id": "@id"}),
    )
    actions: Mapping[str, VerbConfig] = field(
        default_factory=lambda: _frozen({"update": VerbConfig("PUT")}),
    )

    def __post_init__(self) -> None:
        # Callers may pass plain dicts; store read-only views
        object.__setattr__(self, "id_params", _frozen(self.id_params))
        object.__setattr__(self, "actions", _frozen(self.actions))


DEFAULTS = DefaultConfig()


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Settings for the shipped httpx client. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ClientConfig(base_url="https://api.example.com", timeout=5.0)
    """

    base_url: str = ""
    timeout: float = 30.0
    headers: tuple[tuple[str, str], ...] = ()
    follow_redirects: bool = False

    @classmethod
    def from_env(cls, prefix: str = "ROOST_") -> ClientConfig:
        """Build a config from ``ROOST_BASE_URL`` and ``ROOST_TIMEOUT``."""
        timeout = os.environ.get(f"{prefix}TIMEOUT")
        return cls(
            base_url=os.environ.get(f"{prefix}BASE_URL", "").rstrip("/"),
            timeout=float(timeout) if timeout else 30.0,
        )

"""Roost exception hierarchy.

Shared across the registry, dispatcher, resolver, and HTTP client so
every module raises and catches the same types.
"""


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError):
    """Raised when a resource descriptor or dispatch target is invalid.

    Registration errors surface from ``Registry.add()`` at startup;
    dispatch errors surface before any request is built.
    """


class DuplicateResourceError(ConfigurationError):
    """A resource name was registered twice without ``override=True``."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Resource {name!r} is already registered. "
            "Pass override=True to replace it."
        )


class NotFoundError(RoostError, LookupError):
    """``Registry.get()`` was asked for a name that was never registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Resource not registered: {name!r}")


class TransportError(RoostError):
    """Base for failures surfaced by the shipped HTTP client."""


class ResponseError(TransportError):
    """The server answered with a non-2xx status."""

    def __init__(self, status: int, detail: str = "", method: str = "", url: str = "") -> None:
        self.status = status
        self.detail = detail
        self.method = method
        self.url = url
        super().__init__(status, detail)

    def __str__(self) -> str:
        where = f" ({self.method} {self.url})" if self.method else ""
        if self.detail:
            return f"{self.status}: {self.detail}{where}"
        return f"{self.status}{where}"


class MalformedResponseError(TransportError):
    """The response body does not have the shape the verb expects.

    Array verbs (``list``) need a JSON array; every other verb needs a
    JSON object.
    """

"""URL templates with ``:name`` placeholders.

Templates look like ``/users/:user_id/timesheets/:id``. A colon followed
by digits (``http://host:8080``) is a port, not a placeholder, and ``\\:``
escapes a literal colon.

Parameter maps bind placeholders to values. A value starting with ``@``
is read from the payload (``"@id"`` reads ``payload["id"]``,
``"@owner.id"`` reads ``payload["owner"]["id"]``); anything else is a
literal.
"""

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

_PLACEHOLDER = re.compile(r"(?<!\\):([A-Za-z_]\w*)")
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


def placeholders(template: str) -> tuple[str, ...]:
    """Return the placeholder names in *template*, in order of appearance."""
    seen: dict[str, None] = {}
    for match in _PLACEHOLDER.finditer(template):
        seen.setdefault(match.group(1), None)
    return tuple(seen)


def _lookup(payload: Any, path: str) -> Any:
    value = payload
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def bind_params(param_map: Mapping[str, Any], payload: Any = None) -> dict[str, Any]:
    """Resolve a parameter map against *payload*.

    ``@field`` references are looked up on the payload (missing fields
    resolve to ``None``), callables are called, literals pass through.
    """
    bound: dict[str, Any] = {}
    for key, source in param_map.items():
        if callable(source):
            source = source()
        if isinstance(source, str) and source.startswith("@"):
            bound[key] = _lookup(payload, source[1:]) if payload is not None else None
        else:
            bound[key] = source
    return bound


def build_url(template: str, values: Mapping[str, Any]) -> tuple[str, dict[str, Any]]:
    """Fill *template* from *values*.

    Returns ``(url, query)``. Placeholders with a missing or ``None``
    value drop out together with their leading slash, so
    ``/timesheet/:id`` without an id is ``/timesheet``. Values that match
    no placeholder are returned as query parameters.
    """
    names = placeholders(template)

    def substitute(match: re.Match[str]) -> str:
        value = values.get(match.group(1))
        if value is None or value == "":
            return ""
        if isinstance(value, bool):
            value = str(value).lower()
        return quote(str(value), safe="")

    url = _PLACEHOLDER.sub(substitute, template)

    # Collapse slashes left by empty segments, keeping a scheme's "//"
    scheme = _SCHEME.match(url)
    prefix = scheme.group(0) if scheme else ""
    rest = re.sub(r"/{2,}", "/", url[len(prefix):])
    if len(rest) > 1:
        rest = rest.rstrip("/")
    url = (prefix + rest).replace("\\:", ":")

    query = {k: v for k, v in values.items() if k not in names and v is not None}
    return url, query

"""``roost routes`` — list every verb of every registered resource.

Prints one row per verb: RESOURCE, VERB, METHOD, URL. Standard verbs
come first, then the resource's action verbs.
"""

import argparse
import sys

from roost.cli._resolve import resolve_registry
from roost.errors import ConfigurationError
from roost.http.client import STANDARD_VERBS
from roost.registry import Registry

# Dispatcher verb -> endpoint capability
_STANDARD_ROWS = (
    ("list", "query"),
    ("get", "fetch"),
    ("create", "save"),
    ("remove", "remove"),
)


def route_rows(registry: Registry) -> list[tuple[str, str, str, str]]:
    """Build ``(resource, verb, method, url)`` rows for *registry*."""
    rows: list[tuple[str, str, str, str]] = []
    for handle in registry:
        spec = handle.spec
        for verb, capability in _STANDARD_ROWS:
            rows.append((spec.name, verb, STANDARD_VERBS[capability].method, spec.url))
        for verb, config in spec.actions.items():
            rows.append((spec.name, verb, config.method, config.url or spec.url))
    return rows


def run_routes(args: argparse.Namespace) -> None:
    """Resolve ``args.registry`` and print its endpoint table."""
    try:
        registry = resolve_registry(args.registry)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = route_rows(registry)
    if not rows:
        print("No resources registered.", file=sys.stderr)
        raise SystemExit(1)

    headers = ("RESOURCE", "VERB", "METHOD", "URL")
    widths = [max(len(header), *(len(r[i]) for r in rows)) for i, header in enumerate(headers)]

    # Print table
    fmt = "  ".join(f"{{:<{w}}}" for w in widths[:-1]) + "  {}"
    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 6, 80))
    for row in rows:
        print(fmt.format(*row))

"""Roost CLI — inspect expanded resource registries.

Entry point registered as ``roost`` in ``pyproject.toml``::

    [project.scripts]
    roost = "roost.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``roost`` command."""
    parser = argparse.ArgumentParser(
        prog="roost",
        description="Roost — REST resource registry and uniform dispatch.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log registrations while the registry is built",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- roost routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List expanded resource endpoints")
    routes_parser.add_argument(
        "registry",
        help="Import string (e.g. myapi.resources:registry)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command == "routes":
        from roost.cli._routes import run_routes

        run_routes(args)

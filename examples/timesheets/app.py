"""Timesheets — nested resources, an unconventional endpoint, lazy resolves.

Demonstrates:
- Bare-name registration (``users``, ``projects``)
- A nested collection whose URL and params extend the id convention
- An unconventional endpoint with its own URL pattern and verb set
- Route bindings resolved on activation through an Injector

Run:
    ROOST_BASE_URL=http://localhost:8000 roost routes app:registry
    roost routes app:RESOURCES
"""

from roost import Dispatcher, Injector, Registry, resolve

RESOURCES = [
    "users",
    "projects",
    {
        "name": "timesheets",
        "url": "/users/:user_id/timesheets",
        "params": {"user_id": "@user_id"},
    },
    {
        "name": "reports",
        "url": "/reports/:year/:week",
        "params": {"year": "@year", "week": "@week"},
        "unconventional": True,
        "actions": {"regenerate": {"method": "POST", "url": "/reports/:year/:week/regenerate"}},
    },
]


def build_registry(factory=None) -> Registry:
    return Registry(factory).add_all(RESOURCES)


registry = build_registry()


def build_injector(reg: Registry) -> Injector:
    injector = Injector()
    injector.provide(Dispatcher, lambda: Dispatcher(reg))
    return injector


# State name -> bindings resolved when the state activates
STATES = {
    "users.detail": {
        "user": resolve("get", "users", lambda p: {"id": p["user_id"]}),
        "timesheets": resolve("list", "timesheets", lambda p: {"user_id": p["user_id"]}),
    },
    "projects": {
        "projects": resolve("list", "projects"),
    },
}

"""Tests for the timesheets example — registration and state activation."""

from roost import Dispatcher, Registry
from roost.inject import resolve_all
from roost.testing import MemoryBackend


class TestTimesheetsRegistry:
    def test_expanded_urls(self, registry: Registry) -> None:
        assert registry.get("users").spec.url == "/users/:id"
        assert registry.get("timesheets").spec.url == "/users/:user_id/timesheets/:id"
        assert registry.get("reports").spec.url == "/reports/:year/:week"
        assert list(registry.get("reports").spec.actions) == ["regenerate"]

    def test_resources_match_registry(self, app, registry: Registry) -> None:
        assert registry.names() == tuple(
            r if isinstance(r, str) else r["name"] for r in app.RESOURCES
        )


class TestStateActivation:
    async def test_users_detail(self, app, registry: Registry, backend: MemoryBackend) -> None:
        backend.seed("/users", [{"id": 3, "name": "grace"}])
        backend.seed("/users/3/timesheets", [{"hours": 7}])

        data = await resolve_all(
            app.STATES["users.detail"],
            app.build_injector(registry),
            params={"user_id": 3},
        )

        assert data["user"]["name"] == "grace"
        assert [t["hours"] for t in data["timesheets"]] == [7]

    async def test_report_regenerate(self, registry: Registry, backend: MemoryBackend) -> None:
        await registry.get("reports").call("regenerate", {"year": 2024, "week": 12})

        assert backend.requests[-1].method == "POST"
        assert backend.requests[-1].url.path == "/reports/2024/12/regenerate"

    async def test_update_timesheet(self, api: Dispatcher, backend: MemoryBackend) -> None:
        sheet = await api.create("timesheets", {"user_id": 3, "hours": 5})
        await api.update("timesheets", {**sheet, "hours": 8})

        assert backend.requests[-1].url.path == f"/users/3/timesheets/{sheet['id']}"
        assert backend.collections["/users/3/timesheets"][str(sheet["id"])]["hours"] == 8

"""Tests for roost.urls — placeholders, parameter binding, URL building."""

import pytest

from roost.urls import bind_params, build_url, placeholders


class TestPlaceholders:
    def test_in_order(self) -> None:
        assert placeholders("/users/:user_id/timesheets/:id") == ("user_id", "id")

    def test_port_is_not_a_placeholder(self) -> None:
        assert placeholders("http://localhost:8080/widget/:id") == ("id",)

    def test_escaped_colon(self) -> None:
        assert placeholders(r"/time/10\:30/:id") == ("id",)

    def test_duplicates_listed_once(self) -> None:
        assert placeholders("/:a/:b/:a") == ("a", "b")

    def test_none(self) -> None:
        assert placeholders("/status") == ()


class TestBindParams:
    def test_field_reference(self) -> None:
        assert bind_params({"id": "@id"}, {"id": 7, "name": "x"}) == {"id": 7}

    def test_dotted_reference(self) -> None:
        assert bind_params({"owner": "@owner.id"}, {"owner": {"id": 3}}) == {"owner": 3}

    def test_attribute_reference(self) -> None:
        class Model:
            id = 9

        assert bind_params({"id": "@id"}, Model()) == {"id": 9}

    def test_missing_field_is_none(self) -> None:
        assert bind_params({"id": "@id"}, {"name": "x"}) == {"id": None}

    def test_no_payload(self) -> None:
        assert bind_params({"id": "@id", "v": "2"}) == {"id": None, "v": "2"}

    def test_literal_and_callable(self) -> None:
        bound = bind_params({"format": "json", "token": lambda: "abc"}, {})
        assert bound == {"format": "json", "token": "abc"}


class TestBuildUrl:
    def test_substitutes(self) -> None:
        url, query = build_url("/users/:user_id/timesheets/:id", {"user_id": 4, "id": 2})
        assert url == "/users/4/timesheets/2"
        assert query == {}

    def test_missing_trailing_id_drops_segment(self) -> None:
        url, _ = build_url("/timesheet/:id", {"id": None})
        assert url == "/timesheet"

    def test_missing_middle_segment_collapses(self) -> None:
        url, _ = build_url("/users/:user_id/timesheets", {})
        assert url == "/users/timesheets"

    def test_extra_values_become_query(self) -> None:
        url, query = build_url("/timesheet/:id", {"id": None, "week": 12, "skip": None})
        assert url == "/timesheet"
        assert query == {"week": 12}

    def test_values_are_encoded(self) -> None:
        url, _ = build_url("/files/:name", {"name": "a b/c"})
        assert url == "/files/a%20b%2Fc"

    def test_bool_lowercased(self) -> None:
        url, _ = build_url("/flags/:on", {"on": True})
        assert url == "/flags/true"

    def test_absolute_url_keeps_scheme(self) -> None:
        url, _ = build_url("http://localhost:8080/widget/:id", {"id": 1})
        assert url == "http://localhost:8080/widget/1"

    def test_escaped_colon_restored(self) -> None:
        url, _ = build_url(r"/time/10\:30/:id", {"id": 1})
        assert url == "/time/10:30/1"

    @pytest.mark.parametrize("template", ["/", "/:id"])
    def test_root(self, template: str) -> None:
        url, _ = build_url(template, {})
        assert url == "/"

"""Unit tests for response models."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from .errors import DecodeError
from .models import Page, PaginationLinks, Project, Reference, TimeEntry


def describe_resource_from_dict():
    def it_decodes_known_fields_and_keeps_the_payload():
        data = {
            "id": 14307913,
            "name": "Marketing Website",
            "client": {"id": 5735776, "name": "123 Industries", "currency": "EUR"},
            "budget": 50.5,
            "starts_on": "2017-06-01",
            "created_at": "2017-06-26T21:52:18Z",
            "unknown_field": "kept",
        }
        project = Project.from_dict(data)
        assert project.id == 14307913
        assert project.client == Reference(id=5735776, name="123 Industries", raw=data["client"])
        assert project.budget == Decimal("50.5")
        assert project.starts_on == date(2017, 6, 1)
        assert project.created_at == datetime(2017, 6, 26, 21, 52, 18, tzinfo=timezone.utc)
        assert project.raw["unknown_field"] == "kept"

    def it_leaves_missing_optional_fields_at_their_defaults():
        entry = TimeEntry.from_dict({"id": 1})
        assert entry.hours is None
        assert entry.is_running is False

    def it_rejects_missing_required_fields():
        with pytest.raises(DecodeError, match="missing field 'id'"):
            Project.from_dict({"name": "no id"})

    def it_rejects_non_objects():
        with pytest.raises(DecodeError):
            Project.from_dict(["not", "an", "object"])

    def it_rejects_malformed_dates():
        with pytest.raises(DecodeError):
            Project.from_dict({"id": 1, "starts_on": "June 1st"})

    @pytest.mark.parametrize(
        "data",
        [
            {"id": "not-a-number"},
            {"id": True},
            {"id": 1.5},
            {"id": 1, "is_active": "maybe"},
            {"id": 1, "is_active": 1},
            {"id": 1, "name": 42},
            {"id": 1, "client": {"id": "5735776"}},
        ],
    )
    def it_rejects_wrongly_typed_scalars(data):
        with pytest.raises(DecodeError, match="expected"):
            Project.from_dict(data)

    def it_accepts_null_for_optional_scalars():
        project = Project.from_dict({"id": 1, "name": None, "code": None})
        assert project.name is None

    def it_compares_structurally():
        data = {"id": 1, "name": "Same"}
        assert Project.from_dict(data) == Project.from_dict(dict(data))


def describe_page():
    def _body(**overrides):
        body = {
            "projects": [{"id": 1}, {"id": 2}],
            "per_page": 2,
            "total_pages": 3,
            "total_entries": 6,
            "next_page": 2,
            "previous_page": None,
            "page": 1,
            "links": {
                "first": "https://api.harvestapp.com/v2/projects?page=1&per_page=2",
                "next": "https://api.harvestapp.com/v2/projects?page=2&per_page=2",
                "previous": None,
                "last": "https://api.harvestapp.com/v2/projects?page=3&per_page=2",
            },
        }
        body.update(overrides)
        return body

    def it_decodes_the_envelope():
        page = Page.from_dict(_body(), Project)
        assert [p.id for p in page.items] == [1, 2]
        assert page.per_page == 2
        assert page.total_pages == 3
        assert page.total_entries == 6
        assert page.next_page == 2
        assert page.page == 1
        assert page.links.previous is None

    def it_has_a_next_page_when_next_page_is_set():
        page = Page(items=[], next_page=2)
        assert page.has_next_page

    def it_has_a_next_page_when_only_the_link_is_set():
        page = Page(items=[], links=PaginationLinks(next="https://example.test/v2/users?cursor=abc"))
        assert page.has_next_page
        assert page.next_page_url == "https://example.test/v2/users?cursor=abc"

    def it_is_terminal_without_either_signal():
        page = Page(items=[], links=PaginationLinks(first="f", last="l"))
        assert not page.has_next_page
        assert page.next_page_url is None

    def it_requires_the_items_key():
        with pytest.raises(DecodeError):
            Page.from_dict({"per_page": 2}, Project)

    def it_rejects_more_items_than_per_page():
        with pytest.raises(DecodeError, match="exceed per_page"):
            Page.from_dict(_body(per_page=1), Project)

    def it_tolerates_a_missing_links_object():
        page = Page.from_dict({"projects": [], "links": None}, Project)
        assert page.links == PaginationLinks()

    def it_rejects_a_non_integer_page_number():
        with pytest.raises(DecodeError, match="next_page: expected int"):
            Page.from_dict(_body(next_page="2"), Project)

    def it_rejects_a_non_string_link():
        with pytest.raises(DecodeError, match="links.next: expected str"):
            Page.from_dict(_body(links={"next": 2}), Project)

"""Unit tests for the pagination engine."""

import httpx
import pytest

from .context import Context
from .errors import NotFoundError, RequestCancelled
from .models import Project, User
from .options import ListOptions, ProjectListOptions
from .pagination import (
    DEFAULT_PER_PAGE,
    PageIterator,
    PageWalker,
    PaginationMode,
    list_all,
    prepare_options,
)

BASE = "https://api.harvestapp.com/v2/"


def _numbered_pages(page_body, pages):
    """Handler serving ``pages`` (lists of ids) by the ``page`` query parameter."""

    def handler(request):
        number = int(request.url.params["page"])
        ids = pages[number - 1]
        next_page = number + 1 if number < len(pages) else None
        return httpx.Response(
            200,
            json=page_body(
                "projects",
                [{"id": i} for i in ids],
                page=number,
                next_page=next_page,
                total_pages=len(pages),
            ),
        )

    return handler


def _cursor_pages(page_body, pages):
    """Handler serving ``pages`` through opaque ``links.next`` cursors."""

    def handler(request):
        cursor = request.url.params.get("cursor")
        index = int(cursor[1:]) if cursor else 0
        next_url = f"{BASE}users?cursor=c{index + 1}&per_page=2" if index + 1 < len(pages) else None
        return httpx.Response(
            200,
            json=page_body("users", [{"id": i} for i in pages[index]], next_url=next_url),
        )

    return handler


def describe_prepare_options():
    def it_defaults_page_number_listings():
        opts = prepare_options(ListOptions(page=0, per_page=0), PaginationMode.PAGE_NUMBER)
        assert opts == ListOptions(page=1, per_page=DEFAULT_PER_PAGE)

    def it_keeps_explicit_values():
        opts = prepare_options(ListOptions(page=3, per_page=10), PaginationMode.PAGE_NUMBER)
        assert opts == ListOptions(page=3, per_page=10)

    def it_clears_the_page_for_cursor_listings():
        opts = prepare_options(ListOptions(page=4), PaginationMode.CURSOR)
        assert opts.page is None
        assert opts.per_page == DEFAULT_PER_PAGE

    def it_does_not_touch_the_callers_options():
        original = ProjectListOptions(client_id=1)
        prepared = prepare_options(original, PaginationMode.PAGE_NUMBER)
        assert prepared is not original
        assert original.list_options == ListOptions()

    def it_creates_options_when_none_are_given():
        assert prepare_options(None, PaginationMode.PAGE_NUMBER) == ListOptions(page=1, per_page=DEFAULT_PER_PAGE)


def describe_list_all():
    def describe_page_numbers():
        def it_sends_normalized_options_first(make_client, requests_log, page_body):
            client = make_client(_numbered_pages(page_body, [[1]]))
            list_all(client, "projects", Project, ListOptions(page=0, per_page=0))
            params = requests_log[0].url.params
            assert params["page"] == "1"
            assert params["per_page"] == str(DEFAULT_PER_PAGE)

        def it_stops_after_the_page_without_next_page(make_client, requests_log, page_body):
            client = make_client(_numbered_pages(page_body, [[1, 2], [3]]))
            items = list_all(client, "projects", Project)
            assert [p.id for p in items] == [1, 2, 3]
            assert len(requests_log) == 2

        def it_preserves_fetch_order(make_client, page_body):
            client = make_client(_numbered_pages(page_body, [[5, 4], [3, 2], [1]]))
            assert [p.id for p in list_all(client, "projects", Project)] == [5, 4, 3, 2, 1]

        def it_keeps_filters_on_every_request(make_client, requests_log, page_body):
            client = make_client(_numbered_pages(page_body, [[1], [2]]))
            list_all(client, "projects", Project, ProjectListOptions(client_id=9))
            assert [r.url.params["client_id"] for r in requests_log] == ["9", "9"]
            assert [r.url.params["page"] for r in requests_log] == ["1", "2"]

        def it_leaves_the_callers_options_unchanged(make_client, page_body):
            client = make_client(_numbered_pages(page_body, [[1], [2], [3]]))
            opts = ListOptions()
            list_all(client, "projects", Project, opts)
            assert opts == ListOptions()

    def describe_cursors():
        def it_follows_next_links_verbatim(make_client, requests_log, page_body):
            client = make_client(_cursor_pages(page_body, [[1, 2], [3, 4], [5]]))
            items = list_all(client, "users", User, mode=PaginationMode.CURSOR)
            assert [u.id for u in items] == [1, 2, 3, 4, 5]
            assert [str(r.url) for r in requests_log[1:]] == [
                f"{BASE}users?cursor=c1&per_page=2",
                f"{BASE}users?cursor=c2&per_page=2",
            ]

        def it_never_sends_a_page_number(make_client, requests_log, page_body):
            client = make_client(_cursor_pages(page_body, [[1]]))
            list_all(client, "users", User, ListOptions(page=3), PaginationMode.CURSOR)
            assert "page" not in requests_log[0].url.params
            assert requests_log[0].url.params["per_page"] == str(DEFAULT_PER_PAGE)

        def it_falls_back_to_next_page_without_a_link(make_client, requests_log, page_body):
            def handler(request):
                if "page" in request.url.params:
                    return httpx.Response(200, json=page_body("users", [{"id": 2}], page=2))
                return httpx.Response(200, json=page_body("users", [{"id": 1}], next_page=2))

            client = make_client(handler)
            items = list_all(client, "users", User, mode=PaginationMode.CURSOR)
            assert [u.id for u in items] == [1, 2]
            assert requests_log[1].url.params["page"] == "2"

    def it_prefers_the_link_when_both_signals_are_present(make_client, requests_log, page_body):
        def handler(request):
            if request.url.params.get("cursor") == "abc":
                return httpx.Response(200, json=page_body("projects", [{"id": 2}]))
            return httpx.Response(
                200,
                json=page_body("projects", [{"id": 1}], page=1, next_page=2,
                               next_url=f"{BASE}projects?cursor=abc"),
            )

        client = make_client(handler)
        items = list_all(client, "projects", Project)
        assert [p.id for p in items] == [1, 2]
        assert str(requests_log[1].url) == f"{BASE}projects?cursor=abc"

    def it_fails_atomically(make_client, page_body):
        def handler(request):
            if request.url.params["page"] == "2":
                return httpx.Response(404, json={"error": "gone"})
            return httpx.Response(200, json=page_body("projects", [{"id": 1}], page=1, next_page=2))

        client = make_client(handler)
        with pytest.raises(NotFoundError):
            list_all(client, "projects", Project)

    def it_stops_before_the_next_request_once_cancelled(make_client, requests_log, page_body):
        ctx = Context()
        pages = _numbered_pages(page_body, [[1], [2], [3]])

        def handler(request):
            ctx.cancel()
            return pages(request)

        client = make_client(handler)
        with pytest.raises(RequestCancelled):
            list_all(client, "projects", Project, ctx=ctx)
        assert len(requests_log) == 1


def describe_PageWalker():
    def it_counts_requests(make_client, page_body):
        client = make_client(_numbered_pages(page_body, [[1], [2]]))
        walker = PageWalker(client, "projects", Project)
        pages = list(walker.pages())
        assert len(pages) == 2
        assert walker.requests == 2

    def it_advances_only_its_own_options(make_client, page_body):
        client = make_client(_numbered_pages(page_body, [[1], [2]]))
        opts = ListOptions()
        walker = PageWalker(client, "projects", Project, opts)
        list(walker.pages())
        assert walker.options.page == 2
        assert opts.page is None


def describe_PageIterator():
    def it_yields_every_item_then_stops(make_client, requests_log, page_body):
        client = make_client(_numbered_pages(page_body, [[1, 2], [3, 4], [5, 6]]))
        iterator = PageIterator(client, "projects", Project)
        assert [p.id for p in iterator] == [1, 2, 3, 4, 5, 6]
        assert iterator.next_item() is None
        assert [r.url.params["page"] for r in requests_log] == ["1", "2", "3"]

    def it_fetches_lazily(make_client, requests_log, page_body):
        client = make_client(_numbered_pages(page_body, [[1, 2], [3, 4]]))
        iterator = PageIterator(client, "projects", Project)
        assert requests_log == []
        assert next(iterator).id == 1
        assert next(iterator).id == 2
        assert iterator.requests == 1
        assert next(iterator).id == 3
        assert iterator.requests == 2

    def it_skips_empty_pages(make_client, page_body):
        client = make_client(_numbered_pages(page_body, [[1], [], [2]]))
        assert [p.id for p in PageIterator(client, "projects", Project)] == [1, 2]

    def it_handles_an_empty_listing(make_client, page_body):
        client = make_client(_numbered_pages(page_body, [[]]))
        iterator = PageIterator(client, "projects", Project)
        assert iterator.next_item() is None
        with pytest.raises(StopIteration):
            next(iterator)

    def it_follows_cursors(make_client, page_body):
        client = make_client(_cursor_pages(page_body, [[1, 2], [3]]))
        iterator = PageIterator(client, "users", User, mode=PaginationMode.CURSOR)
        assert [u.id for u in iterator.all()] == [1, 2, 3]

    def it_restarts_only_through_a_new_iterator(make_client, requests_log, page_body):
        client = make_client(_numbered_pages(page_body, [[1]]))
        opts = ListOptions(per_page=1)
        first = PageIterator(client, "projects", Project, opts)
        assert [p.id for p in first] == [1]
        assert list(first) == []
        second = PageIterator(client, "projects", Project, opts)
        assert [p.id for p in second] == [1]
        assert [r.url.params["page"] for r in requests_log] == ["1", "1"]

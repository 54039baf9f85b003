"""Pagination over list endpoints.

Two styles are supported behind one traversal:

- page numbers: the client sends ``page`` and follows ``next_page``;
- cursors: ``page`` is left unset and the server's ``links.next`` URL is
  followed verbatim.

Whichever signal a page carries is followed, preferring ``links.next``, so
a traversal started in one mode still terminates correctly if the server
answers in the other. Options are copied at the start of a traversal; the
caller's object is never advanced.
"""

import copy
import enum
import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .context import Context
from .crud import fetch_page, fetch_page_from_url
from .models import Page, Resource
from .options import ListOptions, list_options_of

if TYPE_CHECKING:
    from .client import HarvestClient

logger = logging.getLogger(__name__)

# Harvest's maximum page size
DEFAULT_PER_PAGE = 2000

T = TypeVar("T", bound=Resource)


class PaginationMode(enum.Enum):
    PAGE_NUMBER = "page_number"
    CURSOR = "cursor"


def prepare_options(opts: Any, mode: PaginationMode) -> Any:
    """Return a normalized copy of ``opts`` for the first request of a traversal.

    Page-number traversals start at page 1; cursor traversals never send a
    page number. An unset (None or 0) page size becomes DEFAULT_PER_PAGE.
    """
    opts = copy.deepcopy(opts) if opts is not None else ListOptions()
    lo = list_options_of(opts)
    if mode is PaginationMode.PAGE_NUMBER:
        if not lo.page:
            lo.page = 1
    else:
        lo.page = None
    if not lo.per_page:
        lo.per_page = DEFAULT_PER_PAGE
    return opts


class PageWalker(Generic[T]):
    """Fetches the pages of one listing in order.

    Owns a private copy of the options, which it advances between page-number
    requests.
    """

    def __init__(
        self,
        client: "HarvestClient",
        path: str,
        resource: type[T],
        opts: Any = None,
        mode: PaginationMode = PaginationMode.PAGE_NUMBER,
        *,
        ctx: Context | None = None,
    ):
        self.client = client
        self.path = path
        self.resource = resource
        self.mode = mode
        self.ctx = ctx
        self.options = prepare_options(opts, mode)
        self.requests = 0

    def first(self) -> Page[T]:
        self.requests += 1
        logger.debug("Fetching first page of %s (%s)", self.path, self.mode.value)
        return fetch_page(self.client, self.path, self.resource, self.options, ctx=self.ctx)

    def next(self, page: Page[T]) -> Page[T] | None:
        """Fetch the page after ``page``, or return None if it was the last."""
        next_url = page.next_page_url
        if next_url:
            self.requests += 1
            logger.debug("Following cursor %s", next_url)
            return fetch_page_from_url(self.client, next_url, self.resource, ctx=self.ctx)
        if page.next_page is not None:
            self.requests += 1
            list_options_of(self.options).page = page.next_page
            logger.debug("Fetching page %d of %s", page.next_page, self.path)
            return fetch_page(self.client, self.path, self.resource, self.options, ctx=self.ctx)
        return None

    def pages(self) -> Iterator[Page[T]]:
        page = self.first()
        yield page
        while (page := self.next(page)) is not None:
            yield page


def list_all(
    client: "HarvestClient",
    path: str,
    resource: type[T],
    opts: Any = None,
    mode: PaginationMode = PaginationMode.PAGE_NUMBER,
    *,
    ctx: Context | None = None,
) -> list[T]:
    """Fetch every page and return all items in fetch order.

    Any failure aborts the whole traversal; items gathered so far are dropped.
    """
    items: list[T] = []
    for page in PageWalker(client, path, resource, opts, mode, ctx=ctx).pages():
        items.extend(page.items)
    return items


class PageIterator(Generic[T]):
    """Lazy item-at-a-time iterator over a listing.

    Pages are fetched only when the current one is exhausted. Not safe for
    use from several threads at once; construct a new iterator to restart.
    """

    def __init__(
        self,
        client: "HarvestClient",
        path: str,
        resource: type[T],
        opts: Any = None,
        mode: PaginationMode = PaginationMode.PAGE_NUMBER,
        *,
        ctx: Context | None = None,
    ):
        self._walker = PageWalker(client, path, resource, opts, mode, ctx=ctx)
        self._page: Page[T] | None = None
        self._index = 0
        self._exhausted = False

    @property
    def requests(self) -> int:
        """Number of page requests issued so far."""
        return self._walker.requests

    def __iter__(self) -> "PageIterator[T]":
        return self

    def __next__(self) -> T:
        item = self.next_item()
        if item is None:
            raise StopIteration
        return item

    def next_item(self) -> T | None:
        """Return the next item, or None once every page has been consumed."""
        if self._exhausted:
            return None
        if self._page is None:
            self._page = self._walker.first()
            self._index = 0

        while self._index >= len(self._page.items):
            page = self._walker.next(self._page)
            if page is None:
                self._exhausted = True
                return None
            self._page = page
            self._index = 0

        item = self._page.items[self._index]
        self._index += 1
        return item

    def all(self) -> list[T]:
        """Drain the remaining items into a list."""
        return list(self)

"""CRUD and listing for one API collection, e.g. ``projects``."""

import builtins
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .context import Context
from .crud import create, fetch_one, fetch_page, remove, update_resource
from .models import Page, Resource
from .pagination import PageIterator, PaginationMode, list_all

if TYPE_CHECKING:
    from .client import HarvestClient

T = TypeVar("T", bound=Resource)


class ResourceCollection(Generic[T]):
    """Typed access to a collection endpoint.

    Example:
        clients = ResourceCollection(harvest, "clients", Client)
        active = clients.list(ClientListOptions(is_active=True))
        client = clients.get(5735776)
    """

    def __init__(
        self,
        client: "HarvestClient",
        path: str,
        resource: type[T],
        mode: PaginationMode = PaginationMode.PAGE_NUMBER,
    ):
        self._client = client
        self.path = path
        self.resource = resource
        self.mode = mode

    def _item_path(self, item_id: int) -> str:
        return f"{self.path}/{item_id}"

    def list_page(self, opts: Any = None, *, ctx: Context | None = None) -> Page[T]:
        """Fetch a single page, sending ``opts`` as given."""
        return fetch_page(self._client, self.path, self.resource, opts, ctx=ctx)

    def list(self, opts: Any = None, *, ctx: Context | None = None) -> builtins.list[T]:
        """Fetch every item across all pages."""
        return list_all(self._client, self.path, self.resource, opts, self.mode, ctx=ctx)

    def iter(self, opts: Any = None, *, ctx: Context | None = None) -> PageIterator[T]:
        """Iterate lazily over every item, one page request at a time."""
        return PageIterator(self._client, self.path, self.resource, opts, self.mode, ctx=ctx)

    def get(self, item_id: int, *, ctx: Context | None = None) -> T:
        return fetch_one(self._client, self._item_path(item_id), self.resource, ctx=ctx)

    def create(self, body: Any, *, ctx: Context | None = None) -> T:
        return create(self._client, self.path, self.resource, body, ctx=ctx)

    def update(self, item_id: int, body: Any, *, ctx: Context | None = None) -> T:
        return update_resource(self._client, self._item_path(item_id), self.resource, body, ctx=ctx)

    def delete(self, item_id: int, *, ctx: Context | None = None) -> None:
        remove(self._client, self._item_path(item_id), ctx=ctx)

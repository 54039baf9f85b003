"""Generic CRUD operations usable with any resource type.

The resource class is the shape descriptor: it names the list envelope key
(``collection_key``) and decodes objects (``from_dict``).
"""

from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import urlsplit

from .context import Context
from .errors import DecodeError
from .models import Page, Resource
from .options import add_options

if TYPE_CHECKING:
    from .client import HarvestClient

T = TypeVar("T", bound=Resource)


def _decode(resource: type[T], data: Any, method: str, path: str) -> T:
    if data is None:
        raise DecodeError(f"{method} {path}: empty response body")
    return resource.from_dict(data)


def fetch_one(client: "HarvestClient", path: str, resource: type[T], *, ctx: Context | None = None) -> T:
    """GET a single resource."""
    return _decode(resource, client.request_json("GET", path, ctx=ctx), "GET", path)


def fetch_page(
    client: "HarvestClient",
    path: str,
    resource: type[T],
    opts: Any = None,
    *,
    ctx: Context | None = None,
) -> Page[T]:
    """GET one page of a list endpoint with ``opts`` as query parameters."""
    url = add_options(path, opts)
    data = client.request_json("GET", url, ctx=ctx)
    if data is None:
        raise DecodeError(f"GET {url}: empty response body")
    return Page.from_dict(data, resource)


def fetch_page_from_url(
    client: "HarvestClient",
    url: str,
    resource: type[T],
    *,
    ctx: Context | None = None,
) -> Page[T]:
    """GET the page behind a pagination link, reusing its path and query verbatim."""
    parts = urlsplit(url)
    path = parts.path
    if parts.query:
        path += "?" + parts.query
    data = client.request_json("GET", path, ctx=ctx)
    if data is None:
        raise DecodeError(f"GET {path}: empty response body")
    return Page.from_dict(data, resource)


def create(client: "HarvestClient", path: str, resource: type[T], body: Any, *, ctx: Context | None = None) -> T:
    """POST ``body`` and decode the created resource."""
    return _decode(resource, client.request_json("POST", path, body, ctx=ctx), "POST", path)


def update_resource(
    client: "HarvestClient",
    path: str,
    resource: type[T],
    body: Any = None,
    *,
    ctx: Context | None = None,
) -> T:
    """PATCH ``body`` (None for state transitions) and decode the result."""
    return _decode(resource, client.request_json("PATCH", path, body, ctx=ctx), "PATCH", path)


def remove(client: "HarvestClient", path: str, *, ctx: Context | None = None) -> None:
    """DELETE a resource."""
    client.execute("DELETE", path, ctx=ctx)

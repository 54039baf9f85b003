"""Typed client for the Harvest v2 time-tracking and invoicing API.

Resources are exposed as services on ``HarvestClient``; list endpoints can be
read a page at a time, all at once, or lazily item by item.
"""

from .client import HarvestClient
from .collection import ResourceCollection
from .context import Context, background
from .errors import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    DeadlineExceeded,
    DecodeError,
    ErrorResponse,
    FieldError,
    HarvestError,
    NotFoundError,
    Rate,
    RateLimitError,
    RequestCancelled,
    TransportError,
    UnexpectedStatusError,
    ValidationError,
)
from .models import Page, PaginationLinks, Resource
from .options import ListOptions
from .pagination import DEFAULT_PER_PAGE, PageIterator, PaginationMode, list_all

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_PER_PAGE",
    "AuthenticationError",
    "AuthorizationError",
    "ConfigurationError",
    "Context",
    "DeadlineExceeded",
    "DecodeError",
    "ErrorResponse",
    "FieldError",
    "HarvestClient",
    "HarvestError",
    "ListOptions",
    "NotFoundError",
    "Page",
    "PageIterator",
    "PaginationLinks",
    "PaginationMode",
    "Rate",
    "RateLimitError",
    "RequestCancelled",
    "Resource",
    "ResourceCollection",
    "TransportError",
    "UnexpectedStatusError",
    "ValidationError",
    "background",
    "list_all",
]

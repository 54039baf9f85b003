"""Company (account) information."""

from typing import TYPE_CHECKING

from .context import Context
from .crud import fetch_one
from .models import Company

if TYPE_CHECKING:
    from .client import HarvestClient


class CompanyService:
    def __init__(self, client: "HarvestClient"):
        self._client = client

    def get(self, *, ctx: Context | None = None) -> Company:
        """Retrieve the company for the authenticated account."""
        return fetch_one(self._client, "company", Company, ctx=ctx)

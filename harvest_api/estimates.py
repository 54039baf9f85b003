"""Estimates and estimate item categories."""

from .collection import ResourceCollection
from .context import Context
from .crud import update_resource
from .models import Estimate, EstimateItemCategory
from .pagination import PaginationMode


class EstimatesService(ResourceCollection[Estimate]):
    def __init__(self, client):
        super().__init__(client, "estimates", Estimate)
        self.item_categories = ResourceCollection(
            client, "estimate_item_categories", EstimateItemCategory, PaginationMode.CURSOR
        )

    def _transition(self, estimate_id: int, action: str, ctx: Context | None) -> Estimate:
        return update_resource(self._client, f"estimates/{estimate_id}/{action}", Estimate, ctx=ctx)

    def mark_as_sent(self, estimate_id: int, *, ctx: Context | None = None) -> Estimate:
        return self._transition(estimate_id, "messages", ctx)

    def mark_as_accepted(self, estimate_id: int, *, ctx: Context | None = None) -> Estimate:
        return self._transition(estimate_id, "accept", ctx)

    def mark_as_declined(self, estimate_id: int, *, ctx: Context | None = None) -> Estimate:
        return self._transition(estimate_id, "decline", ctx)

    def reopen(self, estimate_id: int, *, ctx: Context | None = None) -> Estimate:
        return self._transition(estimate_id, "reopen", ctx)

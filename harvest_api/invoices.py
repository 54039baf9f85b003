"""Invoices, invoice messages and invoice item categories."""

from .collection import ResourceCollection
from .context import Context
from .crud import create, update_resource
from .models import Invoice, InvoiceItemCategory, InvoiceMessage
from .pagination import PaginationMode


class InvoicesService(ResourceCollection[Invoice]):
    def __init__(self, client):
        super().__init__(client, "invoices", Invoice)
        self.item_categories = ResourceCollection(
            client, "invoice_item_categories", InvoiceItemCategory, PaginationMode.CURSOR
        )

    def messages(self, invoice_id: int) -> ResourceCollection[InvoiceMessage]:
        return ResourceCollection(self._client, f"invoices/{invoice_id}/messages", InvoiceMessage)

    def _message_event(self, invoice_id: int, event_type: str, ctx: Context | None) -> InvoiceMessage:
        return create(
            self._client, f"invoices/{invoice_id}/messages", InvoiceMessage, {"event_type": event_type}, ctx=ctx
        )

    def mark_as_sent(self, invoice_id: int, *, ctx: Context | None = None) -> InvoiceMessage:
        """Mark a draft invoice as sent."""
        return self._message_event(invoice_id, "send", ctx)

    def mark_as_draft(self, invoice_id: int, *, ctx: Context | None = None) -> InvoiceMessage:
        """Return an open invoice to draft."""
        return self._message_event(invoice_id, "draft", ctx)

    def mark_as_closed(self, invoice_id: int, *, ctx: Context | None = None) -> Invoice:
        return update_resource(self._client, f"invoices/{invoice_id}/close", Invoice, ctx=ctx)

    def reopen(self, invoice_id: int, *, ctx: Context | None = None) -> Invoice:
        return update_resource(self._client, f"invoices/{invoice_id}/reopen", Invoice, ctx=ctx)

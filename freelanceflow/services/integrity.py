"""
Reference checks applied before invoices and payments are written.

Writes that point at another user's (or a missing) client or invoice are
rejected. Records left dangling by a later delete are tolerated: deletes never
cascade.
"""

from typing import Any, Dict, Optional

from freelanceflow.core.exceptions import RecordValidationError
from freelanceflow.schemas.invoice import InvoiceOut
from freelanceflow.storage.interface import Storage


async def ensure_client_owned(storage: Storage, client_id: int, user_id: int) -> None:
    if await storage.clients.get(client_id, user_id) is None:
        raise RecordValidationError(f"Client {client_id} does not exist")


async def ensure_invoice_number_free(
    storage: Storage,
    invoice_number: str,
    user_id: int,
    exclude_invoice_id: Optional[int] = None
) -> None:
    """Invoice numbers are unique per user."""
    for invoice in await storage.invoices.list(user_id):
        if invoice.invoice_number == invoice_number and invoice.id != exclude_invoice_id:
            raise RecordValidationError(f"Invoice number {invoice_number} is already in use")


async def ensure_invoice_owned(storage: Storage, invoice_id: int, user_id: int) -> InvoiceOut:
    invoice = await storage.invoices.get(invoice_id, user_id)
    if invoice is None:
        raise RecordValidationError(f"Invoice {invoice_id} does not exist")
    return invoice


async def ensure_payment_references(
    storage: Storage,
    invoice_id: int,
    client_id: int,
    user_id: int
) -> None:
    """A payment must point at one of the user's invoices and at that invoice's client."""
    invoice = await ensure_invoice_owned(storage, invoice_id, user_id)
    if invoice.client_id != client_id:
        raise RecordValidationError(
            f"Payment client {client_id} does not match invoice {invoice_id} client {invoice.client_id}"
        )


def ensure_invoice_dates(invoice: InvoiceOut, changes: Dict[str, Any]) -> None:
    """The invoice as it would be after ``changes`` must not fall due before it is issued."""
    issue_date = changes.get("issue_date") or invoice.issue_date
    due_date = changes.get("due_date") or invoice.due_date
    if due_date < issue_date:
        raise RecordValidationError("due_date must not be before issue_date")

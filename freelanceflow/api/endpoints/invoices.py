"""
Invoices API Endpoints

CRUD for the current user's invoices. Invoices must reference one of the
user's clients and carry an invoice number the user has not used before.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from freelanceflow.api.dependencies import get_current_user_id, get_storage
from freelanceflow.core.exceptions import NotFoundError
from freelanceflow.schemas.client import ClientOut
from freelanceflow.schemas.invoice import (
    InvoiceCreate,
    InvoiceOut,
    InvoiceUpdate,
    InvoiceWithClient,
)
from freelanceflow.services.integrity import (
    ensure_client_owned,
    ensure_invoice_dates,
    ensure_invoice_number_free,
)
from freelanceflow.storage.interface import Storage

router = APIRouter()

INVOICE_NOT_FOUND = "Invoice not found"


def _with_client(invoice: InvoiceOut, clients: Dict[int, ClientOut]) -> InvoiceWithClient:
    return InvoiceWithClient.model_validate({
        **invoice.model_dump(),
        "client": clients.get(invoice.client_id),
    })


@router.get("/", response_model=List[InvoiceWithClient])
async def list_invoices(
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    """
    List invoices, newest first, each with its client.

    client is null for invoices whose client has been deleted.
    """
    clients = {client.id: client for client in await storage.clients.list(user_id)}
    invoices = await storage.invoices.list(user_id)
    return [_with_client(invoice, clients) for invoice in invoices]


@router.post("/", response_model=InvoiceOut, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    invoice_data: InvoiceCreate,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    await ensure_client_owned(storage, invoice_data.client_id, user_id)
    await ensure_invoice_number_free(storage, invoice_data.invoice_number, user_id)
    return await storage.invoices.create(user_id, invoice_data)


@router.get("/{invoice_id}", response_model=InvoiceWithClient)
async def get_invoice(
    invoice_id: int,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    invoice = await storage.invoices.get(invoice_id, user_id)
    if not invoice:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=INVOICE_NOT_FOUND)

    client: Optional[ClientOut] = await storage.clients.get(invoice.client_id, user_id)
    return _with_client(invoice, {client.id: client} if client else {})


@router.put("/{invoice_id}", response_model=InvoiceOut)
@router.patch("/{invoice_id}", response_model=InvoiceOut)
async def update_invoice(
    invoice_id: int,
    invoice_update: InvoiceUpdate,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    """
    Update an invoice, including status transitions (Draft → Sent → Paid).
    """
    current = await storage.invoices.get(invoice_id, user_id)
    if current is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=INVOICE_NOT_FOUND)

    changes = invoice_update.model_dump(exclude_unset=True)
    ensure_invoice_dates(current, changes)
    if changes.get("client_id") is not None:
        await ensure_client_owned(storage, changes["client_id"], user_id)
    if changes.get("invoice_number") is not None:
        await ensure_invoice_number_free(
            storage, changes["invoice_number"], user_id, exclude_invoice_id=invoice_id
        )

    invoice = await storage.invoices.update(invoice_id, user_id, invoice_update)
    if invoice is None:
        # deleted between the checks and the write
        raise NotFoundError(INVOICE_NOT_FOUND)
    return invoice


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(
    invoice_id: int,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    if not await storage.invoices.delete(invoice_id, user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=INVOICE_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""
Payments API Endpoints

CRUD for payments received against the current user's invoices.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from freelanceflow.api.dependencies import get_current_user_id, get_storage
from freelanceflow.core.exceptions import NotFoundError
from freelanceflow.schemas.payment import PaymentCreate, PaymentOut, PaymentUpdate
from freelanceflow.services.integrity import ensure_payment_references
from freelanceflow.storage.interface import Storage

router = APIRouter()

PAYMENT_NOT_FOUND = "Payment not found"


@router.get("/", response_model=List[PaymentOut])
async def list_payments(
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    return await storage.payments.list(user_id)


@router.post("/", response_model=PaymentOut, status_code=status.HTTP_201_CREATED)
async def create_payment(
    payment_data: PaymentCreate,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    """
    Record a payment.

    invoiceId must be one of the user's invoices and clientId that invoice's client.
    """
    await ensure_payment_references(storage, payment_data.invoice_id, payment_data.client_id, user_id)
    return await storage.payments.create(user_id, payment_data)


@router.get("/{payment_id}", response_model=PaymentOut)
async def get_payment(
    payment_id: int,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    payment = await storage.payments.get(payment_id, user_id)
    if not payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PAYMENT_NOT_FOUND)
    return payment


@router.put("/{payment_id}", response_model=PaymentOut)
@router.patch("/{payment_id}", response_model=PaymentOut)
async def update_payment(
    payment_id: int,
    payment_update: PaymentUpdate,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    payment = await storage.payments.get(payment_id, user_id)
    if not payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PAYMENT_NOT_FOUND)

    changes = payment_update.model_dump(exclude_unset=True)
    if "invoice_id" in changes or "client_id" in changes:
        await ensure_payment_references(
            storage,
            changes.get("invoice_id", payment.invoice_id),
            changes.get("client_id", payment.client_id),
            user_id
        )

    payment = await storage.payments.update(payment_id, user_id, payment_update)
    if payment is None:
        raise NotFoundError(PAYMENT_NOT_FOUND)
    return payment


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payment(
    payment_id: int,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    if not await storage.payments.delete(payment_id, user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PAYMENT_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

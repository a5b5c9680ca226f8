"""
Pydantic schemas for payments.
"""

from typing import ClassVar, Optional, Tuple

from pydantic import Field, field_validator

from freelanceflow.core.enums import PaymentStatus
from freelanceflow.schemas.base import APIModel, AmountIn, Currency, PatchModel, UTCDateTime, format_amount


class PaymentBase(APIModel):
    """Base schema for payment data"""
    invoice_id: int
    client_id: int
    currency: Currency = "USD"
    method: Optional[str] = Field(None, max_length=50)
    status: PaymentStatus = PaymentStatus.PENDING
    received_date: Optional[UTCDateTime] = None


class PaymentCreate(PaymentBase):
    """Schema for recording a payment"""
    amount: AmountIn


class PaymentUpdate(PatchModel):
    """Schema for updating a payment"""
    NOT_NULL: ClassVar[Tuple[str, ...]] = ("invoice_id", "client_id", "amount", "currency", "status")

    invoice_id: Optional[int] = None
    client_id: Optional[int] = None
    amount: Optional[AmountIn] = None
    currency: Optional[Currency] = None
    method: Optional[str] = Field(None, max_length=50)
    status: Optional[PaymentStatus] = None
    received_date: Optional[UTCDateTime] = None


class PaymentOut(PaymentBase):
    id: int
    user_id: int
    amount: str
    created_at: Optional[UTCDateTime] = None

    @field_validator("amount", mode="before")
    @classmethod
    def stored_amount(cls, value):
        return format_amount(value)

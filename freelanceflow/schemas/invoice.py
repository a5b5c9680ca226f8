"""
Pydantic schemas for invoices.
"""

from decimal import Decimal
from typing import ClassVar, List, Optional, Tuple

from pydantic import Field, field_validator, model_validator

from freelanceflow.core.enums import InvoiceStatus
from freelanceflow.schemas.base import APIModel, AmountIn, Currency, PatchModel, UTCDateTime, format_amount
from freelanceflow.schemas.client import ClientOut


class InvoiceItem(APIModel):
    """One line of an invoice"""
    description: str = Field(..., min_length=1)
    quantity: Decimal = Field(Decimal("1"), ge=0)
    rate: Decimal = Field(..., ge=0)
    amount: Decimal = Field(..., ge=0)


class InvoiceBase(APIModel):
    """Base schema for invoice data"""
    client_id: int
    invoice_number: str = Field(..., min_length=1, max_length=50)
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    currency: Currency = "USD"
    status: InvoiceStatus = InvoiceStatus.DRAFT
    issue_date: UTCDateTime
    due_date: UTCDateTime
    paid_date: Optional[UTCDateTime] = None
    items: Optional[List[InvoiceItem]] = None


class InvoiceCreate(InvoiceBase):
    """Schema for creating an invoice"""
    amount: AmountIn

    @model_validator(mode="after")
    def check_dates(self):
        if self.due_date < self.issue_date:
            raise ValueError("due_date must not be before issue_date")
        return self


class InvoiceUpdate(PatchModel):
    """Schema for updating an invoice. Only the fields sent are changed."""
    NOT_NULL: ClassVar[Tuple[str, ...]] = (
        "client_id", "invoice_number", "title", "amount",
        "currency", "status", "issue_date", "due_date",
    )

    client_id: Optional[int] = None
    invoice_number: Optional[str] = Field(None, min_length=1, max_length=50)
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    amount: Optional[AmountIn] = None
    currency: Optional[Currency] = None
    status: Optional[InvoiceStatus] = None
    issue_date: Optional[UTCDateTime] = None
    due_date: Optional[UTCDateTime] = None
    paid_date: Optional[UTCDateTime] = None
    items: Optional[List[InvoiceItem]] = None


class InvoiceOut(InvoiceBase):
    """Stored invoice record; amount is the stored decimal string"""
    id: int
    user_id: int
    amount: str
    created_at: Optional[UTCDateTime] = None

    @field_validator("amount", mode="before")
    @classmethod
    def stored_amount(cls, value):
        return format_amount(value)


class InvoiceWithClient(InvoiceOut):
    """Invoice joined with its client. client is None when the client was deleted."""
    client: Optional[ClientOut] = None

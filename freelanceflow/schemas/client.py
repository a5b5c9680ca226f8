"""
Pydantic schemas for clients.
"""

from decimal import Decimal
from typing import ClassVar, Optional, Tuple

from pydantic import EmailStr, Field

from freelanceflow.core.enums import ClientStatus
from freelanceflow.schemas.base import APIModel, Money, PatchModel, UTCDateTime


class ClientBase(APIModel):
    """Base schema for client data"""
    company_name: str = Field(..., min_length=1, max_length=200)
    contact_person: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = None
    payment_terms: Optional[str] = Field("Net 30", max_length=50)
    status: ClientStatus = ClientStatus.ACTIVE


class ClientCreate(ClientBase):
    """Schema for creating a client"""
    pass


class ClientUpdate(PatchModel):
    """Schema for updating a client. Only the fields sent are changed."""
    NOT_NULL: ClassVar[Tuple[str, ...]] = ("company_name", "status")

    company_name: Optional[str] = Field(None, min_length=1, max_length=200)
    contact_person: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = None
    payment_terms: Optional[str] = Field(None, max_length=50)
    status: Optional[ClientStatus] = None


class ClientOut(ClientBase):
    """Stored client record"""
    id: int
    user_id: int
    email: Optional[str] = None  # stored values are not re-validated as addresses
    created_at: Optional[UTCDateTime] = None


class ClientWithStats(ClientOut):
    """
    Client record plus figures derived from its invoices.

    Read-only projection built by the dashboard service; never persisted.
    """
    total_revenue: Money = Decimal("0.00")
    project_count: int = 0
    last_invoice_date: Optional[UTCDateTime] = None

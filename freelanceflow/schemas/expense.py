"""
Pydantic schemas for expenses.
"""

from typing import ClassVar, Optional, Tuple

from pydantic import Field, field_validator

from freelanceflow.schemas.base import APIModel, AmountIn, Currency, PatchModel, UTCDateTime, format_amount


class ExpenseBase(APIModel):
    """Base schema for expense data"""
    description: str = Field(..., min_length=1, max_length=255)
    currency: Currency = "USD"
    category: str = Field(..., min_length=1, max_length=50)
    date: UTCDateTime
    receipt: Optional[str] = None
    notes: Optional[str] = None


class ExpenseCreate(ExpenseBase):
    """Schema for logging an expense"""
    amount: AmountIn


class ExpenseUpdate(PatchModel):
    """Schema for updating an expense"""
    NOT_NULL: ClassVar[Tuple[str, ...]] = ("description", "amount", "currency", "category", "date")

    description: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[AmountIn] = None
    currency: Optional[Currency] = None
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    date: Optional[UTCDateTime] = None
    receipt: Optional[str] = None
    notes: Optional[str] = None


class ExpenseOut(ExpenseBase):
    id: int
    user_id: int
    amount: str
    created_at: Optional[UTCDateTime] = None

    @field_validator("amount", mode="before")
    @classmethod
    def stored_amount(cls, value):
        return format_amount(value)

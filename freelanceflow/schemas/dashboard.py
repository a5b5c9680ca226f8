"""
Pydantic schemas for the dashboard and the finance assistant.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from freelanceflow.schemas.base import APIModel, Money
from freelanceflow.schemas.client import ClientWithStats


class MonthlyRevenue(APIModel):
    """Collected revenue for one calendar month, labelled YYYY-MM"""
    month: str
    revenue: Money = Decimal("0.00")


class DashboardStats(APIModel):
    """Summary figures derived from a user's records"""
    total_earnings: Money = Decimal("0.00")
    pending_payments: Money = Decimal("0.00")
    monthly_expenses: Money = Decimal("0.00")
    active_clients: int = 0
    monthly_revenue: List[MonthlyRevenue] = Field(..., min_length=6, max_length=6)
    top_clients: List[ClientWithStats] = Field(default_factory=list, max_length=5)


class ChatRequest(APIModel):
    message: str = Field(..., min_length=1, max_length=2000)


class ChatResponse(APIModel):
    reply: str
    intent: Optional[str] = None

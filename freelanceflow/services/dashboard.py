"""
Dashboard aggregation.

Every figure is computed on demand from one snapshot of a user's clients,
invoices and expenses. Nothing is cached or persisted.

Amounts arrive as decimal strings and are summed as ``Decimal``. A record
whose amount cannot be parsed is logged and left out of the sums; it never
aborts the aggregation.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Optional, Tuple

from freelanceflow.core.enums import ClientStatus, InvoiceStatus, PENDING_INVOICE_STATUSES
from freelanceflow.schemas.base import CENTS
from freelanceflow.schemas.client import ClientOut, ClientWithStats
from freelanceflow.schemas.dashboard import DashboardStats, MonthlyRevenue
from freelanceflow.schemas.expense import ExpenseOut
from freelanceflow.schemas.invoice import InvoiceOut
from freelanceflow.storage.interface import Storage

logger = logging.getLogger(__name__)

REVENUE_WINDOW_MONTHS = 6
TOP_CLIENTS_LIMIT = 5
ZERO = Decimal("0.00")


@dataclass
class FinancialSnapshot:
    """All records of one user, read together"""
    clients: List[ClientOut] = field(default_factory=list)
    invoices: List[InvoiceOut] = field(default_factory=list)
    expenses: List[ExpenseOut] = field(default_factory=list)


async def load_snapshot(storage: Storage, user_id: int) -> FinancialSnapshot:
    return FinancialSnapshot(
        clients=await storage.clients.list(user_id),
        invoices=await storage.invoices.list(user_id),
        expenses=await storage.expenses.list(user_id),
    )


def parse_amount(value: Any, record: Any = None) -> Optional[Decimal]:
    """
    Parse a stored amount.

    Args:
        value: Decimal string (or number) as stored
        record: Owning record, only used for the log message

    Returns:
        The amount, or None when it is not a finite number
    """
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, TypeError, ValueError):
        amount = None

    if amount is None or not amount.is_finite():
        logger.warning(
            f"Skipping unparsable amount {value!r} on "
            f"{type(record).__name__} id={getattr(record, 'id', None)}"
        )
        return None
    return amount


def sum_amounts(records: Iterable[Any]) -> Decimal:
    total = ZERO
    for record in records:
        amount = parse_amount(record.amount, record)
        if amount is not None:
            total += amount
    return total.quantize(CENTS)


def month_window(now: datetime, months: int = REVENUE_WINDOW_MONTHS) -> List[Tuple[int, int]]:
    """
    (year, month) pairs from ``months - 1`` months ago through the month of
    ``now``, oldest first.
    """
    current = now.year * 12 + now.month - 1
    window = []
    for offset in range(months - 1, -1, -1):
        year, month_index = divmod(current - offset, 12)
        window.append((year, month_index + 1))
    return window


def _in_month(moment: Optional[datetime], year: int, month: int) -> bool:
    return moment is not None and moment.year == year and moment.month == month


def compute_client_stats(
    clients: List[ClientOut],
    invoices: List[InvoiceOut]
) -> List[ClientWithStats]:
    """
    Join clients against their invoices.

    total_revenue is billed volume: every invoice counts, whatever its status.
    Clients keep their listing order.
    """
    invoices_by_client = defaultdict(list)
    for invoice in invoices:
        invoices_by_client[invoice.client_id].append(invoice)

    stats = []
    for client in clients:
        client_invoices = invoices_by_client.get(client.id, [])
        stats.append(ClientWithStats.model_validate({
            **client.model_dump(),
            "total_revenue": sum_amounts(client_invoices),
            "project_count": len(client_invoices),
            "last_invoice_date": max(
                (invoice.issue_date for invoice in client_invoices),
                default=None
            ),
        }))
    return stats


def rank_top_clients(
    client_stats: List[ClientWithStats],
    limit: int = TOP_CLIENTS_LIMIT
) -> List[ClientWithStats]:
    """Highest billed revenue first; equal revenue keeps listing order."""
    ranked = sorted(client_stats, key=lambda client: client.total_revenue, reverse=True)
    return ranked[:limit]


def compute_dashboard_stats(
    snapshot: FinancialSnapshot,
    now: Optional[datetime] = None
) -> DashboardStats:
    now = now or datetime.now(timezone.utc)

    paid_invoices = [
        invoice for invoice in snapshot.invoices
        if invoice.status == InvoiceStatus.PAID
    ]
    pending_invoices = [
        invoice for invoice in snapshot.invoices
        if invoice.status in PENDING_INVOICE_STATUSES
    ]
    expenses_this_month = [
        expense for expense in snapshot.expenses
        if _in_month(expense.date, now.year, now.month)
    ]

    monthly_revenue = [
        MonthlyRevenue(
            month=f"{year:04d}-{month:02d}",
            revenue=sum_amounts(
                invoice for invoice in paid_invoices
                if _in_month(invoice.issue_date, year, month)
            ),
        )
        for year, month in month_window(now)
    ]

    return DashboardStats(
        total_earnings=sum_amounts(paid_invoices),
        pending_payments=sum_amounts(pending_invoices),
        monthly_expenses=sum_amounts(expenses_this_month),
        active_clients=sum(
            1 for client in snapshot.clients
            if client.status == ClientStatus.ACTIVE
        ),
        monthly_revenue=monthly_revenue,
        top_clients=rank_top_clients(
            compute_client_stats(snapshot.clients, snapshot.invoices)
        ),
    )


async def get_dashboard_stats(
    storage: Storage,
    user_id: int,
    now: Optional[datetime] = None
) -> DashboardStats:
    snapshot = await load_snapshot(storage, user_id)
    stats = compute_dashboard_stats(snapshot, now=now)
    logger.debug(
        f"Dashboard for user {user_id}: {len(snapshot.clients)} clients, "
        f"{len(snapshot.invoices)} invoices, {len(snapshot.expenses)} expenses"
    )
    return stats


async def get_clients_with_stats(storage: Storage, user_id: int) -> List[ClientWithStats]:
    clients = await storage.clients.list(user_id)
    invoices = await storage.invoices.list(user_id)
    return compute_client_stats(clients, invoices)

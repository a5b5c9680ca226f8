"""
Rule-based finance assistant.

A question is matched against ``INTENTS`` in order; the first intent whose
keywords appear in the lower-cased question answers it. Nothing matches →
``DEFAULT_REPLY``. Answers are built from data already loaded for the user.

Priority order:
    top_clients, revenue, expenses, invoices, overdue, profit, help
"""

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, List, Optional

from freelanceflow.core.enums import InvoiceStatus, PENDING_INVOICE_STATUSES
from freelanceflow.schemas.base import CENTS
from freelanceflow.schemas.client import ClientWithStats
from freelanceflow.schemas.dashboard import DashboardStats
from freelanceflow.schemas.expense import ExpenseOut
from freelanceflow.schemas.invoice import InvoiceOut
from freelanceflow.services.dashboard import (
    compute_client_stats,
    compute_dashboard_stats,
    load_snapshot,
    parse_amount,
    sum_amounts,
)
from freelanceflow.storage.interface import Storage

TOP_CLIENTS_SHOWN = 3


@dataclass
class AssistantContext:
    stats: DashboardStats
    invoices: List[InvoiceOut]
    expenses: List[ExpenseOut]
    clients: List[ClientWithStats]


@dataclass(frozen=True)
class Intent:
    name: str
    matches: Callable[[str], bool]
    respond: Callable[[AssistantContext], str]


@dataclass(frozen=True)
class AssistantReply:
    intent: str
    reply: str


def format_currency(amount) -> str:
    """$1,234.56 style, with a leading minus for negative values."""
    value = Decimal(amount).quantize(CENTS)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def any_of(*keywords: str) -> Callable[[str], bool]:
    return lambda text: any(keyword in text for keyword in keywords)


def _asks_top_clients(text: str) -> bool:
    return "top" in text and ("client" in text or "customer" in text)


def _top_clients_reply(context: AssistantContext) -> str:
    if not context.clients:
        return (
            "You don't have any clients yet. Start by adding your first client "
            "to begin tracking revenue and projects."
        )
    top = sorted(context.clients, key=lambda client: client.total_revenue, reverse=True)
    top = top[:TOP_CLIENTS_SHOWN]
    lines = [
        f"{position}. **{client.company_name}** - {format_currency(client.total_revenue)} "
        f"({_plural(client.project_count, 'project')})"
        for position, client in enumerate(top, start=1)
    ]
    return f"Here are your top {len(top)} clients by revenue:\n\n" + "\n".join(lines)


def _revenue_reply(context: AssistantContext) -> str:
    stats = context.stats
    return (
        "Your current financial summary:\n\n"
        f"• **Total Earnings**: {format_currency(stats.total_earnings)}\n"
        f"• **Pending Payments**: {format_currency(stats.pending_payments)}\n"
        f"• **Monthly Expenses**: {format_currency(stats.monthly_expenses)}\n"
        f"• **Active Clients**: {stats.active_clients}"
    )


def _expenses_reply(context: AssistantContext) -> str:
    if not context.expenses:
        return (
            "You haven't logged any expenses yet. Start tracking your business "
            "expenses to get better insights into your spending patterns."
        )

    by_category = defaultdict(Decimal)
    for expense in context.expenses:
        amount = parse_amount(expense.amount, expense)
        if amount is not None:
            by_category[expense.category] += amount

    lines = [
        "Your expense breakdown:\n",
        f"• **Total Expenses**: {format_currency(sum_amounts(context.expenses))}",
    ]
    if by_category:
        category, total = max(by_category.items(), key=lambda item: item[1])
        lines.append(f"• **Biggest Category**: {category} ({format_currency(total)})")
    lines.append(f"• **Number of Expenses**: {len(context.expenses)}")
    return "\n".join(lines)


def _invoices_reply(context: AssistantContext) -> str:
    invoices = context.invoices
    if not invoices:
        return (
            "You haven't created any invoices yet. Create your first invoice "
            "to start tracking payments from clients."
        )
    paid = sum(1 for invoice in invoices if invoice.status == InvoiceStatus.PAID)
    pending = sum(1 for invoice in invoices if invoice.status in PENDING_INVOICE_STATUSES)
    return (
        "Your invoice summary:\n\n"
        f"• **Total Invoices**: {len(invoices)}\n"
        f"• **Paid**: {paid}\n"
        f"• **Pending**: {pending}\n"
        f"• **Total Value**: {format_currency(sum_amounts(invoices))}"
    )


def _overdue_reply(context: AssistantContext) -> str:
    overdue = [
        invoice for invoice in context.invoices
        if invoice.status == InvoiceStatus.OVERDUE
    ]
    if not overdue:
        return (
            "Great news! You don't have any overdue invoices at the moment. "
            "Keep up the good work with timely follow-ups!"
        )
    return (
        f"You have {_plural(len(overdue), 'overdue invoice')} totaling "
        f"{format_currency(sum_amounts(overdue))}. Consider following up with these clients."
    )


def _profit_reply(context: AssistantContext) -> str:
    stats = context.stats
    profit = stats.total_earnings - stats.monthly_expenses
    margin = (profit / stats.total_earnings * 100) if stats.total_earnings > 0 else Decimal(0)
    return (
        "Your profit analysis:\n\n"
        f"• **Net Profit**: {format_currency(profit)}\n"
        f"• **Profit Margin**: {margin:.1f}%\n"
        f"• **Revenue**: {format_currency(stats.total_earnings)}\n"
        f"• **Expenses**: {format_currency(stats.monthly_expenses)}"
    )


HELP_REPLY = (
    "I can help you with:\n\n"
    "• **Financial Overview** - Ask about revenue, expenses, or profits\n"
    "• **Client Analysis** - Find your top clients or client insights\n"
    "• **Invoice Status** - Check on pending, paid, or overdue invoices\n"
    "• **Expense Tracking** - Analyze your spending patterns\n\n"
    "Try asking specific questions like 'Show me my monthly expenses' "
    "or 'Who are my top clients?'"
)

DEFAULT_REPLY = (
    "I understand you're asking about your business finances. Try asking me about:\n\n"
    "• Your top clients\n"
    "• Monthly revenue or expenses\n"
    "• Invoice status\n"
    "• Overdue payments\n"
    "• Profit margins\n\n"
    "Or type 'help' to see all the ways I can assist you!"
)

DEFAULT_INTENT = "default"

INTENTS: List[Intent] = [
    Intent("top_clients", _asks_top_clients, _top_clients_reply),
    Intent("revenue", any_of("revenue", "earning", "income"), _revenue_reply),
    Intent("expenses", any_of("expense", "spending"), _expenses_reply),
    Intent("invoices", any_of("invoice", "bill"), _invoices_reply),
    Intent("overdue", any_of("overdue", "late"), _overdue_reply),
    Intent("profit", any_of("profit", "margin"), _profit_reply),
    Intent("help", any_of("help", "what can you do"), lambda context: HELP_REPLY),
]


def match_intent(message: str) -> Optional[Intent]:
    """First intent whose keywords appear in the message, or None."""
    text = message.lower()
    for intent in INTENTS:
        if intent.matches(text):
            return intent
    return None


def answer(message: str, context: AssistantContext) -> AssistantReply:
    intent = match_intent(message)
    if intent is None:
        return AssistantReply(intent=DEFAULT_INTENT, reply=DEFAULT_REPLY)
    return AssistantReply(intent=intent.name, reply=intent.respond(context))


async def build_context(storage: Storage, user_id: int) -> AssistantContext:
    snapshot = await load_snapshot(storage, user_id)
    return AssistantContext(
        stats=compute_dashboard_stats(snapshot),
        invoices=snapshot.invoices,
        expenses=snapshot.expenses,
        clients=compute_client_stats(snapshot.clients, snapshot.invoices),
    )

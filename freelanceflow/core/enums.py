"""
Status vocabularies for the domain records.
"""

from enum import Enum


class ClientStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class InvoiceStatus(str, Enum):
    """Invoice lifecycle. New invoices start as drafts."""
    DRAFT = "Draft"
    SENT = "Sent"
    PAID = "Paid"
    OVERDUE = "Overdue"


# Invoices that have been billed but not collected yet
PENDING_INVOICE_STATUSES = (InvoiceStatus.SENT, InvoiceStatus.OVERDUE)


class PaymentStatus(str, Enum):
    PENDING = "Pending"
    RECEIVED = "Received"
    FAILED = "Failed"

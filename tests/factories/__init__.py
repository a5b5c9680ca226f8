"""
Data factories for test data generation.

Factories use factory-boy to build request schemas with sensible defaults.
All factories support storing a record via create_async() and building a
JSON request body via payload().

Usage:
    from tests.factories import ClientFactory, InvoiceFactory

    # Store a client for user 1
    acme = await ClientFactory.create_async(storage, company_name="Acme")

    # Store an invoice for that client
    invoice = await InvoiceFactory.create_async(storage, client_id=acme.id)

    # Request body for POST /api/clients/
    body = ClientFactory.payload(company_name="Acme")
"""

from tests.factories.client import ClientFactory
from tests.factories.invoice import InvoiceFactory
from tests.factories.expense import ExpenseFactory
from tests.factories.payment import PaymentFactory

__all__ = [
    "ClientFactory",
    "InvoiceFactory",
    "ExpenseFactory",
    "PaymentFactory",
]

"""
Integration tests for GET /api/dashboard/stats.
"""

import pytest
from datetime import datetime, timezone
from decimal import Decimal
from httpx import AsyncClient

from tests.factories import ClientFactory, ExpenseFactory, InvoiceFactory


@pytest.mark.asyncio
class TestDashboardStats:

    async def test_empty_dashboard(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/dashboard/stats", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["totalEarnings"] == 0
        assert data["pendingPayments"] == 0
        assert data["monthlyExpenses"] == 0
        assert data["activeClients"] == 0
        assert data["topClients"] == []
        assert len(data["monthlyRevenue"]) == 6
        assert all(entry["revenue"] == 0 for entry in data["monthlyRevenue"])

    async def test_current_month_figures(self, client: AsyncClient, storage, auth_headers):
        now = datetime.now(timezone.utc)
        acme = await ClientFactory.create_async(storage, company_name="Acme")
        await InvoiceFactory.create_async(
            storage, client_id=acme.id, amount=Decimal("100.00"), status="Paid", issue_date=now
        )
        await InvoiceFactory.create_async(
            storage, client_id=acme.id, amount=Decimal("200.00"), status="Sent", issue_date=now
        )
        await ExpenseFactory.create_async(storage, amount=Decimal("52.99"), date=now)

        response = await client.get("/api/dashboard/stats", headers=auth_headers)

        data = response.json()
        assert data["totalEarnings"] == 100.0
        assert data["pendingPayments"] == 200.0
        assert data["monthlyExpenses"] == 52.99
        assert data["activeClients"] == 1
        assert data["monthlyRevenue"][-1] == {
            "month": f"{now.year:04d}-{now.month:02d}",
            "revenue": 100.0,
        }
        [top] = data["topClients"]
        assert top["companyName"] == "Acme"
        assert top["totalRevenue"] == 300.0
        assert top["projectCount"] == 2

    async def test_scoped_to_caller(self, client: AsyncClient, storage, other_auth_headers):
        acme = await ClientFactory.create_async(storage, user_id=1)
        await InvoiceFactory.create_async(
            storage, client_id=acme.id, amount=Decimal("100.00"), status="Paid"
        )

        response = await client.get("/api/dashboard/stats", headers=other_auth_headers)

        data = response.json()
        assert data["totalEarnings"] == 0
        assert data["topClients"] == []

    async def test_requires_token(self, client: AsyncClient):
        response = await client.get("/api/dashboard/stats")

        assert response.status_code == 401

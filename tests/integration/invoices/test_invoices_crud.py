"""
Integration tests for invoice CRUD operations.

Endpoints:
- GET /api/invoices/ - List invoices with their client
- POST /api/invoices/ - Create invoice
- GET /api/invoices/{invoice_id} - Get invoice
- PUT/PATCH /api/invoices/{invoice_id} - Update invoice
- DELETE /api/invoices/{invoice_id} - Delete invoice
"""

import pytest
from datetime import timedelta
from httpx import AsyncClient

from tests.factories import ClientFactory, InvoiceFactory


@pytest.mark.asyncio
class TestCreateInvoice:
    """Test POST /api/invoices/."""

    async def test_create_invoice(self, client: AsyncClient, storage, auth_headers):
        acme = await ClientFactory.create_async(storage)

        response = await client.post(
            "/api/invoices/",
            json=InvoiceFactory.payload(client_id=acme.id, invoice_number="INV-001", amount="5000"),
            headers=auth_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["invoiceNumber"] == "INV-001"
        assert data["amount"] == "5000.00"
        assert data["status"] == "Draft"
        assert data["clientId"] == acme.id

    async def test_create_with_line_items(self, client: AsyncClient, storage, auth_headers):
        acme = await ClientFactory.create_async(storage)
        payload = InvoiceFactory.payload(client_id=acme.id)
        payload["items"] = [
            {"description": "Design", "quantity": 10, "rate": "100", "amount": "1000"},
        ]

        response = await client.post("/api/invoices/", json=payload, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["items"][0]["description"] == "Design"

    async def test_unknown_client_rejected(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/api/invoices/",
            json=InvoiceFactory.payload(client_id=999),
            headers=auth_headers
        )

        assert response.status_code == 400
        assert "Client 999" in response.json()["detail"]

    async def test_other_users_client_rejected(self, client: AsyncClient, storage, auth_headers):
        theirs = await ClientFactory.create_async(storage, user_id=2)

        response = await client.post(
            "/api/invoices/",
            json=InvoiceFactory.payload(client_id=theirs.id),
            headers=auth_headers
        )

        assert response.status_code == 400

    async def test_duplicate_number_rejected(self, client: AsyncClient, storage, auth_headers):
        acme = await ClientFactory.create_async(storage)
        await InvoiceFactory.create_async(storage, client_id=acme.id, invoice_number="INV-001")

        response = await client.post(
            "/api/invoices/",
            json=InvoiceFactory.payload(client_id=acme.id, invoice_number="INV-001"),
            headers=auth_headers
        )

        assert response.status_code == 400

    async def test_same_number_for_another_user(self, client: AsyncClient, storage, other_auth_headers):
        mine = await ClientFactory.create_async(storage, user_id=1)
        theirs = await ClientFactory.create_async(storage, user_id=2)
        await InvoiceFactory.create_async(storage, client_id=mine.id, invoice_number="INV-001")

        response = await client.post(
            "/api/invoices/",
            json=InvoiceFactory.payload(client_id=theirs.id, invoice_number="INV-001"),
            headers=other_auth_headers
        )

        assert response.status_code == 201

    async def test_negative_amount_rejected(self, client: AsyncClient, storage, auth_headers):
        acme = await ClientFactory.create_async(storage)
        payload = {**InvoiceFactory.payload(client_id=acme.id), "amount": "-5.00"}

        response = await client.post("/api/invoices/", json=payload, headers=auth_headers)

        assert response.status_code == 422

    async def test_unknown_status_rejected(self, client: AsyncClient, storage, auth_headers):
        acme = await ClientFactory.create_async(storage)
        payload = {**InvoiceFactory.payload(client_id=acme.id), "status": "Cancelled"}

        response = await client.post("/api/invoices/", json=payload, headers=auth_headers)

        assert response.status_code == 422


@pytest.mark.asyncio
class TestListInvoices:
    """Test GET /api/invoices/."""

    async def test_list_newest_first_with_client(self, client: AsyncClient, storage, auth_headers):
        acme = await ClientFactory.create_async(storage, company_name="Acme")
        first = await InvoiceFactory.create_async(storage, client_id=acme.id)
        second = await InvoiceFactory.create_async(storage, client_id=acme.id)

        response = await client.get("/api/invoices/", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert [i["id"] for i in data] == [second.id, first.id]
        assert data[0]["client"]["companyName"] == "Acme"

    async def test_list_only_own_invoices(self, client: AsyncClient, storage, other_auth_headers):
        acme = await ClientFactory.create_async(storage, user_id=1)
        await InvoiceFactory.create_async(storage, client_id=acme.id)

        response = await client.get("/api/invoices/", headers=other_auth_headers)

        assert response.json() == []


@pytest.mark.asyncio
class TestGetInvoice:
    """Test GET /api/invoices/{invoice_id}."""

    async def test_get_invoice(self, client: AsyncClient, storage, auth_headers):
        acme = await ClientFactory.create_async(storage, company_name="Acme")
        invoice = await InvoiceFactory.create_async(storage, client_id=acme.id)

        response = await client.get(f"/api/invoices/{invoice.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["client"]["id"] == acme.id

    async def test_get_other_users_invoice(self, client: AsyncClient, storage, other_auth_headers):
        acme = await ClientFactory.create_async(storage, user_id=1)
        invoice = await InvoiceFactory.create_async(storage, client_id=acme.id)

        response = await client.get(f"/api/invoices/{invoice.id}", headers=other_auth_headers)

        assert response.status_code == 404


@pytest.mark.asyncio
class TestUpdateInvoice:
    """Test PUT/PATCH /api/invoices/{invoice_id}."""

    async def test_status_transition(self, client: AsyncClient, storage, auth_headers):
        acme = await ClientFactory.create_async(storage)
        invoice = await InvoiceFactory.create_async(storage, client_id=acme.id)

        response = await client.patch(
            f"/api/invoices/{invoice.id}",
            json={"status": "Sent"},
            headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "Sent"
        assert data["amount"] == invoice.amount
        assert data["invoiceNumber"] == invoice.invoice_number

    async def test_keep_own_number(self, client: AsyncClient, storage, auth_headers):
        acme = await ClientFactory.create_async(storage)
        invoice = await InvoiceFactory.create_async(storage, client_id=acme.id, invoice_number="INV-9")

        response = await client.put(
            f"/api/invoices/{invoice.id}",
            json={"invoiceNumber": "INV-9", "title": "Renamed"},
            headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Renamed"

    async def test_take_used_number_rejected(self, client: AsyncClient, storage, auth_headers):
        acme = await ClientFactory.create_async(storage)
        await InvoiceFactory.create_async(storage, client_id=acme.id, invoice_number="INV-1")
        other = await InvoiceFactory.create_async(storage, client_id=acme.id, invoice_number="INV-2")

        response = await client.patch(
            f"/api/invoices/{other.id}",
            json={"invoiceNumber": "INV-1"},
            headers=auth_headers
        )

        assert response.status_code == 400

    async def test_move_to_unknown_client_rejected(self, client: AsyncClient, storage, auth_headers):
        acme = await ClientFactory.create_async(storage)
        invoice = await InvoiceFactory.create_async(storage, client_id=acme.id)

        response = await client.patch(
            f"/api/invoices/{invoice.id}",
            json={"clientId": 999},
            headers=auth_headers
        )

        assert response.status_code == 400
        assert (await storage.invoices.get(invoice.id, 1)).client_id == acme.id

    async def test_cannot_clear_amount(self, client: AsyncClient, storage, auth_headers):
        acme = await ClientFactory.create_async(storage)
        invoice = await InvoiceFactory.create_async(storage, client_id=acme.id)

        response = await client.patch(
            f"/api/invoices/{invoice.id}",
            json={"amount": None},
            headers=auth_headers
        )

        assert response.status_code == 422

    async def test_due_before_issue_rejected(self, client: AsyncClient, storage, auth_headers):
        acme = await ClientFactory.create_async(storage)
        invoice = await InvoiceFactory.create_async(storage, client_id=acme.id)

        response = await client.patch(
            f"/api/invoices/{invoice.id}",
            json={"dueDate": "2000-01-01T00:00:00Z"},
            headers=auth_headers
        )

        assert response.status_code == 400
        assert (await storage.invoices.get(invoice.id, 1)).due_date == invoice.due_date

    async def test_moving_issue_date_past_due_rejected(self, client: AsyncClient, storage, auth_headers):
        acme = await ClientFactory.create_async(storage)
        invoice = await InvoiceFactory.create_async(storage, client_id=acme.id)
        later = (invoice.due_date + timedelta(days=1)).isoformat()

        response = await client.put(
            f"/api/invoices/{invoice.id}",
            json={"issueDate": later},
            headers=auth_headers
        )

        assert response.status_code == 400

    async def test_moving_both_dates_together(self, client: AsyncClient, storage, auth_headers):
        acme = await ClientFactory.create_async(storage)
        invoice = await InvoiceFactory.create_async(storage, client_id=acme.id)
        issued = invoice.due_date + timedelta(days=10)

        response = await client.patch(
            f"/api/invoices/{invoice.id}",
            json={
                "issueDate": issued.isoformat(),
                "dueDate": (issued + timedelta(days=30)).isoformat(),
                "currency": "eur",
            },
            headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["currency"] == "EUR"

    async def test_update_missing_invoice(self, client: AsyncClient, auth_headers):
        response = await client.patch(
            "/api/invoices/999",
            json={"status": "Paid"},
            headers=auth_headers
        )

        assert response.status_code == 404


@pytest.mark.asyncio
class TestDeleteInvoice:
    """Test DELETE /api/invoices/{invoice_id}."""

    async def test_delete_invoice(self, client: AsyncClient, storage, auth_headers):
        acme = await ClientFactory.create_async(storage)
        invoice = await InvoiceFactory.create_async(storage, client_id=acme.id)

        response = await client.delete(f"/api/invoices/{invoice.id}", headers=auth_headers)

        assert response.status_code == 204
        assert await storage.invoices.get(invoice.id, 1) is None

    async def test_delete_other_users_invoice(self, client: AsyncClient, storage, other_auth_headers):
        acme = await ClientFactory.create_async(storage, user_id=1)
        invoice = await InvoiceFactory.create_async(storage, client_id=acme.id)

        response = await client.delete(f"/api/invoices/{invoice.id}", headers=other_auth_headers)

        assert response.status_code == 404

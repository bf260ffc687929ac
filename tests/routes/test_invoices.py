"""
Tests for the /invoices endpoints.

Tests cover:
- Upload: exactly one file is accepted, zero or several are rejected before
  the invoice service is called
- Listing: filters and orderBy parsing
- Currencies
- Fetch by id: 404 on absent invoices, 400 on malformed ids
- Document download: headers, 404, unmapped MIME types
- Status update: partial bodies and validation
"""

from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from invoices_service.dependencies import get_invoices_service
from invoices_service.main import app
from invoices_service.schemas.invoices import (
    InvoiceCreate,
    InvoiceDocumentFile,
    InvoiceFilters,
    InvoiceUpdateRequest,
    OrderByClause,
)

INVOICE_ID = "3f1c2a9e-8b7d-4c6e-9a5f-1b2c3d4e5f60"
MISSING_INVOICE_ID = "00000000-0000-4000-8000-000000000000"


@pytest.fixture
def client(invoices_service):
    """Test client with the invoice service replaced by a fake."""
    app.dependency_overrides[get_invoices_service] = lambda: invoices_service
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


class TestCreateInvoice:
    """Tests for POST /invoices."""

    def test_single_file_creates_invoice(self, client, invoices_service, invoice_row):
        invoices_service.create_invoice.return_value = invoice_row

        response = client.post(
            "/invoices",
            files={"invoice": ("invoice.pdf", b"%PDF-1.4 test", "application/pdf")}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == INVOICE_ID
        assert data["status"] == "created"
        assert data["vendorId"] == invoice_row["vendor_id"]
        assert data["dueDate"] == "2026-11-30"

        invoices_service.create_invoice.assert_awaited_once()
        request = invoices_service.create_invoice.call_args.args[0]
        assert isinstance(request, InvoiceCreate)
        assert request.document.content == b"%PDF-1.4 test"
        assert request.document.mime_type == "application/pdf"

    def test_file_field_name_does_not_matter(self, client, invoices_service, invoice_row):
        invoices_service.create_invoice.return_value = invoice_row

        response = client.post(
            "/invoices",
            files={"whatever": ("scan.png", b"\x89PNG", "image/png")}
        )

        assert response.status_code == 201
        request = invoices_service.create_invoice.call_args.args[0]
        assert request.document.mime_type == "image/png"

    def test_no_files_returns_400(self, client, invoices_service):
        response = client.post("/invoices", data={"note": "no file here"})

        assert response.status_code == 400
        assert response.json() == {
            "error": "invalid_request",
            "details": "No files were uploaded",
        }
        invoices_service.create_invoice.assert_not_called()

    def test_empty_body_returns_400(self, client, invoices_service):
        response = client.post("/invoices")

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_request"
        invoices_service.create_invoice.assert_not_called()

    def test_two_files_returns_400(self, client, invoices_service):
        response = client.post(
            "/invoices",
            files=[
                ("first", ("a.pdf", b"%PDF-a", "application/pdf")),
                ("second", ("b.pdf", b"%PDF-b", "application/pdf")),
            ]
        )

        assert response.status_code == 400
        assert response.json()["details"] == "Must upload a single file"
        invoices_service.create_invoice.assert_not_called()

    def test_two_files_under_same_field_returns_400(self, client, invoices_service):
        response = client.post(
            "/invoices",
            files=[
                ("invoice", ("a.pdf", b"%PDF-a", "application/pdf")),
                ("invoice", ("b.pdf", b"%PDF-b", "application/pdf")),
            ]
        )

        assert response.status_code == 400
        invoices_service.create_invoice.assert_not_called()

    def test_service_failure_returns_500(self, client, invoices_service):
        invoices_service.create_invoice.side_effect = RuntimeError("storage down")

        response = client.post(
            "/invoices",
            files={"invoice": ("invoice.pdf", b"%PDF", "application/pdf")}
        )

        assert response.status_code == 500
        assert response.json() == {
            "error": "internal_error",
            "details": "An unexpected error occurred",
        }


class TestListInvoices:
    """Tests for GET /invoices."""

    def test_no_filters_lists_everything(self, client, invoices_service, invoice_row):
        invoices_service.list_invoices.return_value = [invoice_row]

        response = client.get("/invoices")

        assert response.status_code == 200
        assert [invoice["id"] for invoice in response.json()] == [INVOICE_ID]

        filters = invoices_service.list_invoices.call_args.args[0]
        assert filters == InvoiceFilters()

    def test_filters_are_forwarded(self, client, invoices_service):
        vendor_id = "7a6b5c4d-3e2f-4a1b-8c9d-0e1f2a3b4c5d"

        response = client.get(
            "/invoices",
            params=[
                ("ids", INVOICE_ID),
                ("ids", MISSING_INVOICE_ID),
                ("statuses", "paid"),
                ("vendorIds", vendor_id),
            ]
        )

        assert response.status_code == 200
        filters = invoices_service.list_invoices.call_args.args[0]
        assert filters.ids == [UUID(INVOICE_ID), UUID(MISSING_INVOICE_ID)]
        assert filters.statuses == ["paid"]
        assert filters.vendor_ids == [UUID(vendor_id)]
        assert filters.order_by == []

    def test_order_by_due_date(self, client, invoices_service):
        response = client.get(
            "/invoices",
            params=[("orderBy", "dueDate asc"), ("orderBy", "dueDate desc")]
        )

        assert response.status_code == 200
        filters = invoices_service.list_invoices.call_args.args[0]
        assert filters.order_by == [
            OrderByClause(field="dueDate", direction="asc"),
            OrderByClause(field="dueDate", direction="desc"),
        ]

    @pytest.mark.parametrize(
        "clause",
        ["price asc", "dueDate sideways", "dueDate", "dueDate asc extra"],
    )
    def test_invalid_order_by_returns_400(self, client, invoices_service, clause):
        response = client.get("/invoices", params={"orderBy": clause})

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_request"
        invoices_service.list_invoices.assert_not_called()

    def test_unknown_status_returns_400(self, client, invoices_service):
        response = client.get("/invoices", params={"statuses": "lost"})

        assert response.status_code == 400
        invoices_service.list_invoices.assert_not_called()

    def test_malformed_vendor_id_returns_400(self, client, invoices_service):
        response = client.get("/invoices", params={"vendorIds": "not-a-uuid"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "query.vendorIds.0"
        invoices_service.list_invoices.assert_not_called()


class TestListCurrencies:
    """Tests for GET /invoices/currencies."""

    def test_returns_currency_codes(self, client, invoices_service):
        response = client.get("/invoices/currencies")

        assert response.status_code == 200
        assert response.json() == ["USD", "EUR", "GBP", "ILS"]
        invoices_service.list_currencies.assert_called_once_with()


class TestGetInvoice:
    """Tests for GET /invoices/{invoice_id}."""

    def test_existing_invoice(self, client, invoices_service, invoice_row):
        invoices_service.get_invoice_by_id.return_value = invoice_row

        response = client.get(f"/invoices/{INVOICE_ID}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == INVOICE_ID
        assert data["amount"] == 1250.5
        assert data["currency"] == "USD"
        assert "documentPath" not in data
        invoices_service.get_invoice_by_id.assert_awaited_once_with(INVOICE_ID)

    def test_missing_invoice_returns_404(self, client, invoices_service):
        response = client.get(f"/invoices/{MISSING_INVOICE_ID}")

        assert response.status_code == 404
        assert response.json() == {
            "error": "not_found",
            "details": f"Invoice {MISSING_INVOICE_ID} not found",
        }

    def test_malformed_id_returns_400(self, client, invoices_service):
        response = client.get("/invoices/not-a-uuid")

        assert response.status_code == 400
        invoices_service.get_invoice_by_id.assert_not_called()


class TestDownloadInvoiceDocument:
    """Tests for GET /invoices/{invoice_id}/download."""

    def test_pdf_document(self, client, invoices_service):
        content = b"%PDF-1.4 invoice body"
        invoices_service.download_invoice_document_file.return_value = InvoiceDocumentFile(
            content=content, mime_type="application/pdf"
        )

        response = client.get(f"/invoices/{INVOICE_ID}/download")

        assert response.status_code == 200
        assert response.content == content
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-length"] == str(len(content))
        assert response.headers["content-disposition"] == (
            f'attachment; filename="{INVOICE_ID}.pdf"'
        )

    def test_png_document(self, client, invoices_service):
        invoices_service.download_invoice_document_file.return_value = InvoiceDocumentFile(
            content=b"\x89PNG", mime_type="image/png"
        )

        response = client.get(f"/invoices/{INVOICE_ID}/download")

        assert response.status_code == 200
        assert response.headers["content-disposition"].endswith('.png"')

    def test_text_document_content_type_is_not_rewritten(self, client, invoices_service):
        invoices_service.download_invoice_document_file.return_value = InvoiceDocumentFile(
            content=b"invoice 42", mime_type="text/plain"
        )

        response = client.get(f"/invoices/{INVOICE_ID}/download")

        assert response.status_code == 200
        assert response.headers["content-type"] == "text/plain"
        assert response.headers["content-disposition"] == (
            f'attachment; filename="{INVOICE_ID}.txt"'
        )

    def test_missing_invoice_returns_404(self, client, invoices_service):
        response = client.get(f"/invoices/{MISSING_INVOICE_ID}/download")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_unmapped_mime_type_returns_500(self, client, invoices_service):
        invoices_service.download_invoice_document_file.return_value = InvoiceDocumentFile(
            content=b"???", mime_type="application/x-no-such-type"
        )

        response = client.get(f"/invoices/{INVOICE_ID}/download")

        assert response.status_code == 500
        assert response.json()["error"] == "invalid_state"


class TestUpdateInvoice:
    """Tests for PATCH /invoices/{invoice_id}."""

    def test_update_status(self, client, invoices_service, invoice_row):
        invoices_service.update_invoice.return_value = {**invoice_row, "status": "paid"}

        response = client.patch(f"/invoices/{INVOICE_ID}", json={"status": "paid"})

        assert response.status_code == 200
        assert response.json()["status"] == "paid"
        invoices_service.update_invoice.assert_awaited_once_with(
            INVOICE_ID, InvoiceUpdateRequest(status="paid")
        )

    def test_empty_body_is_delegated(self, client, invoices_service, invoice_row):
        invoices_service.update_invoice.return_value = invoice_row

        response = client.patch(f"/invoices/{INVOICE_ID}", json={})

        assert response.status_code == 200
        assert response.json()["status"] == "created"
        invoices_service.update_invoice.assert_awaited_once_with(
            INVOICE_ID, InvoiceUpdateRequest()
        )

    def test_missing_body_is_delegated_as_empty_update(self, client, invoices_service, invoice_row):
        invoices_service.update_invoice.return_value = invoice_row

        response = client.patch(f"/invoices/{INVOICE_ID}")

        assert response.status_code == 200
        assert response.json()["id"] == INVOICE_ID
        invoices_service.update_invoice.assert_awaited_once_with(
            INVOICE_ID, InvoiceUpdateRequest()
        )

    def test_null_status_returns_400(self, client, invoices_service):
        response = client.patch(f"/invoices/{INVOICE_ID}", json={"status": None})

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_request"
        invoices_service.update_invoice.assert_not_called()

    def test_row_without_id_returns_500(self, client, invoices_service, invoice_row):
        row = dict(invoice_row)
        del row["id"]
        invoices_service.update_invoice.return_value = row

        response = client.patch(f"/invoices/{INVOICE_ID}", json={"status": "paid"})

        assert response.status_code == 500
        assert response.json()["error"] == "internal_error"

    def test_any_status_transition_is_accepted(self, client, invoices_service, invoice_row):
        invoices_service.update_invoice.return_value = invoice_row

        response = client.patch(f"/invoices/{INVOICE_ID}", json={"status": "created"})

        assert response.status_code == 200

    def test_unknown_status_returns_400(self, client, invoices_service):
        response = client.patch(f"/invoices/{INVOICE_ID}", json={"status": "lost"})

        assert response.status_code == 400
        invoices_service.update_invoice.assert_not_called()

    def test_unknown_field_returns_400(self, client, invoices_service):
        response = client.patch(f"/invoices/{INVOICE_ID}", json={"amount": 10})

        assert response.status_code == 400
        invoices_service.update_invoice.assert_not_called()

    def test_collaborator_not_found_propagates(self, client, invoices_service):
        from invoices_service.errors import NotFoundError

        invoices_service.update_invoice.side_effect = NotFoundError(
            f"Invoice {MISSING_INVOICE_ID} not found"
        )

        response = client.patch(f"/invoices/{MISSING_INVOICE_ID}", json={"status": "paid"})

        assert response.status_code == 404

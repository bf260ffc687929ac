"""
Pytest configuration for invoices service tests.

Sets up test environment and global fixtures.
"""
import os
import pytest
from unittest.mock import AsyncMock, MagicMock

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-service-key")


@pytest.fixture
def supabase_client():
    """
    Mock Supabase client.
    Returns a MagicMock that simulates Supabase client behavior.
    """
    mock_client = MagicMock()
    return mock_client


@pytest.fixture
def invoices_service():
    """
    Fake invoice service collaborator.

    Async methods are AsyncMocks; list_currencies is synchronous like the real one.
    """
    from invoices_service.services.invoice_service import InvoicesService

    service = MagicMock(spec=InvoicesService)
    service.create_invoice = AsyncMock()
    service.list_invoices = AsyncMock(return_value=[])
    service.get_invoice_by_id = AsyncMock(return_value=None)
    service.download_invoice_document_file = AsyncMock(return_value=None)
    service.update_invoice = AsyncMock()
    service.list_currencies = MagicMock(return_value=["USD", "EUR", "GBP", "ILS"])
    return service


@pytest.fixture
def invoice_row():
    """Invoice row as returned by the invoice service."""
    return {
        "id": "3f1c2a9e-8b7d-4c6e-9a5f-1b2c3d4e5f60",
        "status": "created",
        "vendor_id": "7a6b5c4d-3e2f-4a1b-8c9d-0e1f2a3b4c5d",
        "due_date": "2026-11-30",
        "amount": 1250.5,
        "currency": "USD",
        "document_path": "invoices/3f1c2a9e-8b7d-4c6e-9a5f-1b2c3d4e5f60",
        "document_mime_type": "application/pdf",
        "created_at": "2026-10-01T10:00:00Z",
        "updated_at": "2026-10-01T10:00:00Z",
    }

"""
Service layer for the invoices service.

Contains the default invoice service collaborator:
- Persists invoice rows in Supabase
- Stores invoice documents in Supabase Storage

Routes depend on the service through invoices_service.dependencies, never on
this implementation directly.
"""

from .invoice_service import InvoicesService
from .storage import (
    build_document_path,
    delete_invoice_document,
    download_invoice_document,
    upload_invoice_document,
)

__all__ = [
    "InvoicesService",
    "build_document_path",
    "upload_invoice_document",
    "download_invoice_document",
    "delete_invoice_document",
]

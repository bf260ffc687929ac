"""
Invoice persistence service.

Default invoice service collaborator, backed by Supabase:
- invoice rows live in the SUPABASE_INVOICES_TABLE table
- invoice documents live in the SUPABASE_DOCUMENTS_BUCKET storage bucket

Rows are returned as plain dicts with snake_case column names; the routes map
them to InvoiceResponse models.
"""

import logging
from typing import Any, Dict, List, Optional, cast
from uuid import uuid4

from supabase import Client

from invoices_service.config import settings
from invoices_service.errors import NotFoundError
from invoices_service.schemas.invoices import (
    InvoiceCreate,
    InvoiceDocumentFile,
    InvoiceFilters,
    InvoiceUpdateRequest,
)
from invoices_service.services.storage import (
    delete_invoice_document,
    download_invoice_document,
    upload_invoice_document,
)
from invoices_service.utils.constants import ORDERABLE_FIELDS, SUPPORTED_CURRENCIES

logger = logging.getLogger(__name__)

INITIAL_INVOICE_STATUS = "created"


class InvoicesService:
    """
    Invoice management backed by a Supabase table and storage bucket.

    Concurrency control, if any, is left to Postgres; the service holds no
    mutable state besides its client.
    """

    def __init__(self, supabase_client: Client, table: Optional[str] = None):
        self.supabase_client = supabase_client
        self.table = table or settings.SUPABASE_INVOICES_TABLE

    async def create_invoice(self, request: InvoiceCreate) -> Dict[str, Any]:
        """
        Create an invoice from an uploaded document.

        This function:
        1. Uploads the document bytes to storage under a fresh invoice id
        2. Inserts the invoice row with status "created"
        3. Removes the uploaded document again if the insert fails

        Returns:
            The created invoice row

        Raises:
            Exception: If the upload or the insert fails
        """
        invoice_id = str(uuid4())
        document = request.document

        storage_path = await upload_invoice_document(
            supabase_client=self.supabase_client,
            invoice_id=invoice_id,
            content=document.content,
            mime_type=document.mime_type,
        )

        invoice_data = {
            "id": invoice_id,
            "status": INITIAL_INVOICE_STATUS,
            "document_path": storage_path,
            "document_mime_type": document.mime_type,
        }

        logger.info(f"Creating invoice {invoice_id} (mime_type={document.mime_type})")

        try:
            result = self.supabase_client.table(self.table).insert(invoice_data).execute()
            if not result.data:
                raise Exception("Failed to create invoice: no data returned")
        except Exception:
            await delete_invoice_document(self.supabase_client, storage_path)
            raise

        created_invoice = cast(Dict[str, Any], result.data[0])

        logger.info(f"Invoice created successfully: id={created_invoice.get('id')}")

        return created_invoice

    async def list_invoices(self, filters: InvoiceFilters) -> List[Dict[str, Any]]:
        """
        List invoices matching every supplied filter, ordered per filters.order_by.

        An empty filter set returns all invoices.
        """
        logger.debug(
            f"Listing invoices (ids={filters.ids}, statuses={filters.statuses}, "
            f"vendor_ids={filters.vendor_ids}, order_by={filters.order_by})"
        )

        query = self.supabase_client.table(self.table).select("*")

        if filters.ids:
            query = query.in_("id", [str(invoice_id) for invoice_id in filters.ids])
        if filters.statuses:
            query = query.in_("status", list(filters.statuses))
        if filters.vendor_ids:
            query = query.in_("vendor_id", [str(vendor_id) for vendor_id in filters.vendor_ids])

        for clause in filters.order_by:
            query = query.order(ORDERABLE_FIELDS[clause.field], desc=clause.descending)

        result = query.execute()

        invoices = cast(List[Dict[str, Any]], result.data or [])

        logger.info(f"Fetched {len(invoices)} invoices")

        return invoices

    def list_currencies(self) -> List[str]:
        """Static list of supported currency codes."""
        return list(SUPPORTED_CURRENCIES)

    async def get_invoice_by_id(self, invoice_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a single invoice by its ID.

        Returns:
            Invoice row if found, None otherwise
        """
        logger.debug(f"Fetching invoice {invoice_id}")

        result = (
            self.supabase_client.table(self.table)
            .select("*")
            .eq("id", invoice_id)
            .execute()
        )

        if not result.data:
            logger.info(f"Invoice {invoice_id} not found")
            return None

        return cast(Dict[str, Any], result.data[0])

    async def download_invoice_document_file(self, invoice_id: str) -> Optional[InvoiceDocumentFile]:
        """
        Fetch the document of an invoice.

        Returns:
            The document bytes and MIME type, or None if the invoice does not exist
        """
        invoice = await self.get_invoice_by_id(invoice_id)

        if invoice is None:
            return None

        content = await download_invoice_document(
            supabase_client=self.supabase_client,
            storage_path=invoice["document_path"],
        )

        return InvoiceDocumentFile(
            content=content,
            mime_type=invoice["document_mime_type"],
        )

    async def update_invoice(self, invoice_id: str, update: InvoiceUpdateRequest) -> Dict[str, Any]:
        """
        Apply a partial update to an invoice.

        Only fields present in the update are written. An empty update returns
        the invoice unchanged.

        Raises:
            NotFoundError: If no invoice has this id
        """
        update_data = update.model_dump(exclude_none=True)

        if not update_data:
            invoice = await self.get_invoice_by_id(invoice_id)
            if invoice is None:
                raise NotFoundError(f"Invoice {invoice_id} not found")
            return invoice

        logger.info(f"Updating invoice {invoice_id}: fields={list(update_data.keys())}")

        result = (
            self.supabase_client.table(self.table)
            .update(update_data)
            .eq("id", invoice_id)
            .execute()
        )

        if not result.data:
            raise NotFoundError(f"Invoice {invoice_id} not found")

        return cast(Dict[str, Any], result.data[0])

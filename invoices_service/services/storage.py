"""
Supabase Storage service for invoice documents.

Handles uploading invoice documents to Supabase Storage and reading them back.
Documents are immutable once uploaded and are stored under
invoices/{invoice_id}.
"""

import logging

from supabase import Client

from invoices_service.config import settings

logger = logging.getLogger(__name__)


def build_document_path(invoice_id: str) -> str:
    """Storage path of the document owned by invoice_id."""
    return f"invoices/{invoice_id}"


async def upload_invoice_document(
    supabase_client: Client,
    invoice_id: str,
    content: bytes,
    mime_type: str,
) -> str:
    """
    Upload an invoice document to Supabase Storage.

    Args:
        supabase_client: Supabase client
        invoice_id: UUID of the invoice owning the document
        content: Raw document bytes
        mime_type: MIME type of the document (stored as the object's content-type)

    Returns:
        Storage path in the format: invoices/{invoice_id}

    Raises:
        Exception: If upload fails
    """
    storage_path = build_document_path(invoice_id)

    logger.info(
        f"Uploading invoice document: invoice_id={invoice_id}, "
        f"size={len(content)} bytes, mime_type={mime_type}"
    )

    try:
        supabase_client.storage.from_(
            settings.SUPABASE_DOCUMENTS_BUCKET
        ).upload(
            path=storage_path,
            file=content,
            file_options={"content-type": mime_type}
        )
    except Exception as e:
        logger.error(
            f"Failed to upload invoice document to storage: {e}",
            exc_info=True
        )
        raise

    logger.info(f"Uploaded invoice document to storage: storage_path={storage_path}")

    return storage_path


async def download_invoice_document(
    supabase_client: Client,
    storage_path: str,
) -> bytes:
    """
    Download the raw bytes of a stored invoice document.

    Raises:
        Exception: If the download fails
    """
    logger.debug(f"Downloading invoice document: storage_path={storage_path}")

    try:
        content = supabase_client.storage.from_(
            settings.SUPABASE_DOCUMENTS_BUCKET
        ).download(storage_path)
    except Exception as e:
        logger.error(
            f"Failed to download invoice document: "
            f"storage_path={storage_path}, error={e}",
            exc_info=True
        )
        raise

    return content


async def delete_invoice_document(
    supabase_client: Client,
    storage_path: str,
) -> bool:
    """
    Remove a stored document.

    Called when the invoice row insert fails after its document was uploaded.

    Returns:
        True if deletion was successful, False otherwise
    """
    logger.info(f"Deleting invoice document from storage: storage_path={storage_path}")

    try:
        supabase_client.storage.from_(
            settings.SUPABASE_DOCUMENTS_BUCKET
        ).remove([storage_path])
        return True
    except Exception as e:
        logger.error(
            f"Failed to delete invoice document from storage: "
            f"storage_path={storage_path}, error={e}",
            exc_info=True
        )
        return False

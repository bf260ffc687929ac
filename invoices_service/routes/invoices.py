"""
Invoice API endpoints.

Stateless façade over the invoice service collaborator.

Endpoints:
- POST /invoices - Upload a single invoice document, creating an invoice
- GET /invoices - List invoices (filters: ids, statuses, vendorIds, orderBy)
- GET /invoices/currencies - List supported currencies
- GET /invoices/{invoice_id} - Get single invoice
- GET /invoices/{invoice_id}/download - Download the invoice document
- PATCH /invoices/{invoice_id} - Update invoice status

All request validation happens here, before the service is called. Errors are
raised as InvoiceServiceError subclasses and mapped to HTTP responses by
invoices_service.errors.register_error_handlers.
"""

import logging
import mimetypes
from typing import Annotated, Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status
from starlette.datastructures import UploadFile

from invoices_service.dependencies import get_invoices_service
from invoices_service.errors import InvalidRequestError, InvalidStateError, NotFoundError
from invoices_service.schemas.invoices import (
    InvoiceCreate,
    InvoiceDocumentFile,
    InvoiceFilters,
    InvoiceResponse,
    InvoiceStatus,
    InvoiceUpdateRequest,
    OrderByClause,
)
from invoices_service.services.invoice_service import InvoicesService
from invoices_service.utils.constants import (
    DEFAULT_DOCUMENT_MIME_TYPE,
    ORDER_DIRECTIONS,
    ORDERABLE_FIELDS,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invoices", tags=["invoices"])


def _build_invoice_response(invoice: Dict[str, Any]) -> InvoiceResponse:
    """Helper to build InvoiceResponse from an invoice row."""
    amount = invoice.get("amount")

    return InvoiceResponse(
        id=str(invoice["id"]),
        status=invoice.get("status", "created"),
        vendor_id=str(invoice["vendor_id"]) if invoice.get("vendor_id") else None,
        due_date=str(invoice["due_date"]) if invoice.get("due_date") else None,
        amount=float(amount) if amount is not None else None,
        currency=invoice.get("currency"),
        created_at=str(invoice["created_at"]) if invoice.get("created_at") else None,
        updated_at=str(invoice["updated_at"]) if invoice.get("updated_at") else None,
    )


def parse_order_by(clauses: Optional[List[str]]) -> List[OrderByClause]:
    """
    Parse "<field> <direction>" orderBy clauses, preserving their order.

    Raises:
        InvalidRequestError: If a clause is malformed, names a field other than
            dueDate, or a direction other than asc/desc
    """
    order_by: List[OrderByClause] = []

    for clause in clauses or []:
        parts = clause.split()

        if len(parts) != 2:
            raise InvalidRequestError(
                f"Invalid orderBy clause {clause!r}, expected '<field> <direction>'"
            )

        field, direction = parts

        if field not in ORDERABLE_FIELDS:
            raise InvalidRequestError(f"Invalid field in orderBy clause {clause!r}")

        if direction not in ORDER_DIRECTIONS:
            raise InvalidRequestError(f"Invalid direction in orderBy clause {clause!r}")

        order_by.append(OrderByClause(field=field, direction=direction))

    return order_by


def resolve_file_extension(mime_type: str) -> Optional[str]:
    """File extension (without the dot) registered for mime_type, or None."""
    extension = mimetypes.guess_extension(mime_type.split(";")[0].strip(), strict=False)
    return extension.lstrip(".") if extension else None


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload an invoice document",
    description="""
    Create an invoice from an uploaded document.

    The multipart request must carry exactly one file, under any field name.
    The new invoice starts with status "created".
    """
)
async def create_invoice(
    request: Request,
    service: Annotated[InvoicesService, Depends(get_invoices_service)],
) -> InvoiceResponse:
    form = await request.form()
    files = [value for _, value in form.multi_items() if isinstance(value, UploadFile)]

    if len(files) == 0:
        raise InvalidRequestError("No files were uploaded")

    if len(files) != 1:
        raise InvalidRequestError("Must upload a single file")

    invoice_file = files[0]
    content = await invoice_file.read()
    mime_type = invoice_file.content_type or DEFAULT_DOCUMENT_MIME_TYPE

    logger.info(
        f"Creating invoice from upload: filename={invoice_file.filename}, "
        f"size={len(content)} bytes, mime_type={mime_type}"
    )

    invoice = await service.create_invoice(
        InvoiceCreate(document=InvoiceDocumentFile(content=content, mime_type=mime_type))
    )

    return _build_invoice_response(invoice)


@router.get(
    "",
    response_model=List[InvoiceResponse],
    status_code=status.HTTP_200_OK,
    summary="List invoices",
    description="""
    List invoices matching every supplied filter.

    Query parameters are repeatable:
    - ids: invoice UUIDs
    - statuses: invoice statuses
    - vendorIds: vendor UUIDs
    - orderBy: "dueDate asc" or "dueDate desc", applied in the order given
    """
)
async def list_invoices(
    service: Annotated[InvoicesService, Depends(get_invoices_service)],
    ids: Annotated[Optional[List[UUID]], Query(description="Invoice UUIDs")] = None,
    statuses: Annotated[Optional[List[InvoiceStatus]], Query(description="Invoice statuses")] = None,
    vendor_ids: Annotated[Optional[List[UUID]], Query(alias="vendorIds", description="Vendor UUIDs")] = None,
    order_by: Annotated[Optional[List[str]], Query(alias="orderBy", description="'dueDate asc' or 'dueDate desc'")] = None,
) -> List[InvoiceResponse]:
    filters = InvoiceFilters(
        ids=ids,
        statuses=statuses,
        vendor_ids=vendor_ids,
        order_by=parse_order_by(order_by),
    )

    invoices = await service.list_invoices(filters)

    return [_build_invoice_response(invoice) for invoice in invoices]


@router.get(
    "/currencies",
    response_model=List[str],
    status_code=status.HTTP_200_OK,
    summary="List supported currencies",
)
async def list_currencies(
    service: Annotated[InvoicesService, Depends(get_invoices_service)],
) -> List[str]:
    return service.list_currencies()


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    status_code=status.HTTP_200_OK,
    summary="Get invoice by ID",
)
async def get_invoice(
    invoice_id: UUID,
    service: Annotated[InvoicesService, Depends(get_invoices_service)],
) -> InvoiceResponse:
    invoice = await service.get_invoice_by_id(str(invoice_id))

    if not invoice:
        raise NotFoundError(f"Invoice {invoice_id} not found")

    return _build_invoice_response(invoice)


@router.get(
    "/{invoice_id}/download",
    status_code=status.HTTP_200_OK,
    summary="Download the invoice document",
    response_class=Response,
    responses={200: {"content": {"application/octet-stream": {}}}},
)
async def download_invoice_document(
    invoice_id: UUID,
    service: Annotated[InvoicesService, Depends(get_invoices_service)],
) -> Response:
    """
    Return the raw document bytes as an attachment named "{invoice_id}.{ext}".

    The extension is derived from the document MIME type; a MIME type with no
    known extension is an InvalidState error.
    """
    document = await service.download_invoice_document_file(str(invoice_id))

    if not document:
        raise NotFoundError(f"Invoice {invoice_id} not found")

    file_extension = resolve_file_extension(document.mime_type)

    if not file_extension:
        raise InvalidStateError(
            f"Invalid mimeType {document.mime_type} for invoice {invoice_id}"
        )

    return Response(
        content=document.content,
        headers={
            "Content-Type": document.mime_type,
            "Content-Length": str(len(document.content)),
            "Content-Disposition": f'attachment; filename="{invoice_id}.{file_extension}"',
        },
    )


@router.patch(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    status_code=status.HTTP_200_OK,
    summary="Update invoice status",
    description="""
    Partially update an invoice. The only updatable field is status; a
    missing body is the same no-op update as {}.

    No existence check is made here; the invoice service decides what a
    missing invoice means.
    """
)
async def update_invoice(
    invoice_id: UUID,
    service: Annotated[InvoicesService, Depends(get_invoices_service)],
    request: Annotated[Optional[InvoiceUpdateRequest], Body()] = None,
) -> InvoiceResponse:
    if request is None:
        request = InvoiceUpdateRequest()

    logger.info(f"Updating invoice {invoice_id} (status={request.status})")

    invoice = await service.update_invoice(str(invoice_id), request)

    return _build_invoice_response(invoice)

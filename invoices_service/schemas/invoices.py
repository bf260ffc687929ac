"""
Pydantic schemas for the invoice endpoints.

These models define the strict request/response contracts of the invoices API
and the request structs handed to the invoice service collaborator.

Wire format uses camelCase keys (vendorId, dueDate, mimeType, ...). Models
accept both the camelCase alias and the Python field name when parsing.
"""

from typing import List, Literal, Optional, get_args
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Invoice lifecycle states (no transition ordering is enforced)
InvoiceStatus = Literal["created", "approved", "rejected", "paid"]

INVOICE_STATUSES: tuple[str, ...] = get_args(InvoiceStatus)

OrderByField = Literal["dueDate"]
OrderByDirection = Literal["asc", "desc"]


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Response models ---

class InvoiceResponse(CamelModel):
    """
    Invoice representation returned by every invoice endpoint.

    The document itself is not inlined; it is fetched through
    GET /invoices/{invoiceId}/download.
    """
    id: str = Field(..., description="Invoice UUID")
    status: InvoiceStatus = Field(..., description="Current lifecycle status")
    vendor_id: Optional[str] = Field(None, description="UUID of the vendor that issued the invoice")
    due_date: Optional[str] = Field(None, description="Payment due date (ISO-8601 date)", examples=["2026-11-30"])
    amount: Optional[float] = Field(None, description="Total invoice amount")
    currency: Optional[str] = Field(None, description="ISO-4217 currency code", examples=["USD"])
    created_at: Optional[str] = Field(None, description="ISO-8601 timestamp when created")
    updated_at: Optional[str] = Field(None, description="ISO-8601 timestamp of last update")


# --- Collaborator request structs ---

class InvoiceDocumentFile(CamelModel):
    """Binary document attached to an invoice, with its MIME type."""
    content: bytes = Field(..., description="Raw document bytes")
    mime_type: str = Field(..., description="MIME type of the document", examples=["application/pdf"])


class InvoiceCreate(CamelModel):
    """Request handed to the invoice service when a document is uploaded."""
    document: InvoiceDocumentFile


class OrderByClause(CamelModel):
    """A parsed "<field> <direction>" orderBy clause."""
    field: OrderByField
    direction: OrderByDirection

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


class InvoiceFilters(CamelModel):
    """
    Filter set for listing invoices.

    Every supplied filter must match (intersection). Empty filters list everything.
    order_by clauses are applied in the order given.
    """
    ids: Optional[List[UUID]] = None
    statuses: Optional[List[InvoiceStatus]] = None
    vendor_ids: Optional[List[UUID]] = None
    order_by: List[OrderByClause] = Field(default_factory=list)


# --- Update models ---

class InvoiceUpdateRequest(CamelModel):
    """
    Body of PATCH /invoices/{invoiceId}.

    status may be omitted, but not sent as null. An empty body is a valid
    (no-op) update that is still delegated to the invoice service.
    """
    status: Optional[InvoiceStatus] = Field(
        None,
        description="New lifecycle status",
        examples=["approved", "paid"]
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid"  # Reject requests with unexpected fields
    )

    @field_validator("status", mode="before")
    @classmethod
    def reject_null_status(cls, value):
        """Omitting status is allowed; an explicit null is not a status."""
        if value is None:
            raise ValueError("status must be one of " + ", ".join(INVOICE_STATUSES))
        return value

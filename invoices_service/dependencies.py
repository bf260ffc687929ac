"""
FastAPI dependency functions providing the invoice API collaborators.

Routes receive the invoice service and the vendors client through these
functions. Tests and alternative deployments swap them with
app.dependency_overrides.
"""

import logging

from invoices_service.clients.vendors import VendorsClient
from invoices_service.db.client import get_supabase_client
from invoices_service.services.invoice_service import InvoicesService

logger = logging.getLogger(__name__)


def get_invoices_service() -> InvoicesService:
    """
    Provide the invoice service collaborator.

    Usage:
        @router.get("/invoices")
        async def list_invoices(
            service: Annotated[InvoicesService, Depends(get_invoices_service)]
        ):
            ...
    """
    return InvoicesService(supabase_client=get_supabase_client())


def get_vendors_client() -> VendorsClient:
    """Provide the vendors service client."""
    return VendorsClient()

"""
HTTP client for the vendors service.

Used to look up the vendors referenced by invoices (Invoice.vendorId).
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx

from invoices_service.config import settings

logger = logging.getLogger(__name__)


class VendorsClient:
    """
    Thin async client over the vendors service REST API.

    Endpoints consumed:
    - GET /vendors?ids=<uuid>&ids=<uuid>
    - GET /vendors/{vendor_id}
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.VENDORS_SERVICE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.VENDORS_TIMEOUT_SECONDS
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def list_vendors(self, ids: Optional[Iterable[str]] = None) -> List[Dict[str, Any]]:
        """
        List vendors, optionally restricted to the given ids.

        Raises:
            httpx.HTTPStatusError: If the vendors service answers with an error status
        """
        params = {"ids": [str(vendor_id) for vendor_id in ids]} if ids else None

        async with self._client() as client:
            response = await client.get("/vendors", params=params)
            response.raise_for_status()

        vendors = response.json()
        logger.debug(f"Fetched {len(vendors)} vendors")
        return vendors

    async def get_vendor_by_id(self, vendor_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a single vendor.

        Returns:
            The vendor, or None if the vendors service answers 404

        Raises:
            httpx.HTTPStatusError: On any other error status
        """
        async with self._client() as client:
            response = await client.get(f"/vendors/{vendor_id}")

        if response.status_code == httpx.codes.NOT_FOUND:
            logger.info(f"Vendor {vendor_id} not found")
            return None

        response.raise_for_status()
        return response.json()

    async def vendor_exists(self, vendor_id: str) -> bool:
        return await self.get_vendor_by_id(vendor_id) is not None

"""
Supabase client factory.

The invoices service talks to Supabase with a single server-side key
(SUPABASE_KEY). The client is created lazily on first use and reused for the
lifetime of the process.
"""

import logging
from typing import Optional

from invoices_service.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)

_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get or create the Supabase client used by the invoice service.

    Returns:
        A configured Supabase client.

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_KEY is not configured
    """
    global _supabase_client

    if _supabase_client is None:
        if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_KEY must be configured "
                "to use the Supabase invoice service."
            )

        logger.info(f"Initializing Supabase client for {settings.SUPABASE_URL}")
        _supabase_client = create_client(
            supabase_url=settings.SUPABASE_URL,
            supabase_key=settings.SUPABASE_KEY
        )

    return _supabase_client


def reset_supabase_client() -> None:
    """Drop the cached client (used by tests and on configuration reload)."""
    global _supabase_client
    _supabase_client = None

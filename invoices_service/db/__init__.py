"""
Database access layer for the invoices service.

Includes:
- Supabase client initialization (Postgres table + Storage bucket)
"""

from .client import get_supabase_client, reset_supabase_client

__all__ = ["get_supabase_client", "reset_supabase_client"]

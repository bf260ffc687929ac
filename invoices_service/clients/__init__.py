"""
Clients for services the invoices service depends on.
"""

from .vendors import VendorsClient

__all__ = ["VendorsClient"]

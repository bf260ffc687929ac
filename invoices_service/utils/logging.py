"""
Logging utilities for the invoices service.

Modules log through logging.getLogger(__name__); handlers and format live on
the root logger, configured once at startup.

Rules:
- NEVER log raw invoice document bytes
- NEVER log Supabase keys or other secrets
- Log identifiers, MIME types and sizes only
"""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level_name: str = "INFO") -> None:
    """Configure the root logger once for the whole process."""
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format=LOG_FORMAT
    )

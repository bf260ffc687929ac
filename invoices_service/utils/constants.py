"""
Static reference values for the invoices service.
"""

# Currencies accepted on invoices (ISO-4217 codes), exposed by GET /invoices/currencies
SUPPORTED_CURRENCIES = ("USD", "EUR", "GBP", "ILS")

# Only field an invoice listing can be ordered by (wire name -> column name)
ORDERABLE_FIELDS = {
    "dueDate": "due_date",
}

ORDER_DIRECTIONS = ("asc", "desc")

# Fallback for uploaded parts that carry no content type
DEFAULT_DOCUMENT_MIME_TYPE = "application/octet-stream"

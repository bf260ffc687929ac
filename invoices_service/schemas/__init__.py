"""
Pydantic schemas for API request and response validation.

Every endpoint uses explicit Pydantic models; requests are validated before
any call into the invoice service.
"""

"""
Invoices service: HTTP API for uploading, listing, downloading and updating invoices.
"""

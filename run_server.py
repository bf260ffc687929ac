"""
Start the invoices service locally.

Usage:
    python run_server.py
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Invoices Service")
    print("=" * 60)
    print()
    print("API Endpoints:")
    print("   - Health Check:      GET   http://localhost:8000/health")
    print("   - Upload Invoice:    POST  http://localhost:8000/invoices")
    print("   - List Invoices:     GET   http://localhost:8000/invoices")
    print("   - List Currencies:   GET   http://localhost:8000/invoices/currencies")
    print("   - Get Invoice:       GET   http://localhost:8000/invoices/{invoice_id}")
    print("   - Download Document: GET   http://localhost:8000/invoices/{invoice_id}/download")
    print("   - Update Status:     PATCH http://localhost:8000/invoices/{invoice_id}")
    print("   - API Docs:                http://localhost:8000/docs")
    print()
    print("Test with curl:")
    print('   curl -X POST "http://localhost:8000/invoices" \\')
    print('     -F "invoice=@/path/to/invoice.pdf;type=application/pdf"')
    print()
    print("=" * 60)
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "invoices_service.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )

# Middleware package init
"""
Bookshelf API — Middleware Package
====================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

The request ID is set before the access log line is written, so every
log entry for a request carries the same ID.
"""

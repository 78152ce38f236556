# Middleware package init
"""
OurNotes — Middleware Package
===============================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → [Unhandled Error] → Route Handler

    1. Request ID: read or generate the correlation ID first
    2. Logging: one access line per request, tagged with that ID
    3. CORS: FastAPI's CORSMiddleware (answers preflight requests)
    4. Unhandled Error: last-resort 500 body, still inside CORS
"""

# Middleware package init
"""
Shopfront Backend: Middleware Package
======================================

What:  Cross-cutting concerns applied per request.

Application middleware (outermost first):
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route

Per-route pipeline steps, declared as FastAPI dependencies:
    require_token (app.auth) → blank_stripped_body (remove_blanks) → handler

Each pipeline step either returns a value to the next step or raises, which
short-circuits the request to the exception handlers in `app.main`.
"""

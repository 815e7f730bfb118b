"""
Shopfront Backend: Application Package Initializer
===================================================

What: Marks the `app` directory as a Python package.
Who:  Imported by uvicorn (`app.main:app`), Alembic and pytest.

Architecture Note:
    The backend is a thin layered CRUD service:

    ┌─────────────────────────────────────┐
    │   Routes (products, favorites)      │  ← HTTP, auth, guards, status codes
    ├─────────────────────────────────────┤
    │   Services (repository access)      │  ← find / create / update / delete
    ├─────────────────────────────────────┤
    │   Models & Schemas                  │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database                          │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Route handlers compose three small helpers around each service call:
    the blank-field stripper, the not-found translator and the ownership
    guard. Failures are never caught in a handler; they propagate to the
    exception handlers registered in `app.main`.
"""

__version__ = "1.0.0"

"""
OurNotes — Application Package Initializer
============================================

What: Marks the `ournotes` directory as a Python package.
Who:  Imported by uvicorn (`ournotes.main:app`), Alembic, pytest and the
      client package (`ournotes.client`).

Architecture Note:
    The package holds two components that never share a process:

    ┌─────────────────────────────────────┐
    │        Routes (API Layer)           │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Note operations)      │  ← Validation, statements
    ├─────────────────────────────────────┤
    │    Models & Schemas (Data)          │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │     Database (Persistence)          │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    ┌─────────────────────────────────────┐
    │   client/ (Note Cache + fallback)   │  ← httpx + local snapshots
    └─────────────────────────────────────┘

    Both sides are driven by the note kinds declared in `ournotes.kinds`.
"""

__version__ = "1.0.0"

"""
NoteKeep Backend — Application Package Initializer
==================================================

What: Marks the `notekeep` directory as a Python package.
Why:  Enables module imports like `from notekeep.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Authenticator / Access Service    │  ← Identity, ownership, outcome mapping
    ├─────────────────────────────────────┤
    │            Note Store               │  ← Owner-scoped queries
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Every note operation receives an explicit Identity produced by the
    authenticator. Nothing below the routes reads request state.
"""

__version__ = "1.0.0"

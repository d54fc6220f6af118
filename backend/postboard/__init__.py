"""
PostBoard Backend - Application Package Initializer
====================================================

What: Marks the `postboard` directory as a Python package.
Who:  Imported by uvicorn (postboard.main:app), Alembic, and pytest.

Architecture Note:
    The backend is layered the same way for every resource (users, posts, comments):

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP verbs, paths, status codes
    ├─────────────────────────────────────┤
    │  Services (Validation, Ownership)   │  ← business rules, error translation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch the session directly; they pass it to a service.
"""

__version__ = "1.0.0"

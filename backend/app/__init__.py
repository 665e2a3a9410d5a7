"""
ButtonUp Backend — Application Package Initializer
===================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    This backend is a thin layer in front of hosted services:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │       Services (Gateways)           │  ← One SDK call per operation
    ├─────────────────────────────────────┤
    │  Supabase Storage │ Notion │ IndexNow│  ← Externally-owned state
    └─────────────────────────────────────┘

    There is no database of our own: every entity is a request-scoped
    projection of data that lives in Supabase or Notion.
"""

__version__ = "1.0.0"

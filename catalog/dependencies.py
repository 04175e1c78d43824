"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
Tests swap the store through app.dependency_overrides[get_store].
"""

from typing import Annotated, Optional

from fastapi import Depends, Form

from catalog.database import SessionLocal
from catalog.services.store import CatalogStore

_store = CatalogStore(SessionLocal)


def get_store() -> CatalogStore:
    """
    Catalog store dependency.

    Returns the process-wide store bound to SessionLocal. The store opens
    its own sessions per call, so a single instance can be shared.
    """
    return _store


Store = Annotated[CatalogStore, Depends(get_store)]


# =============================================================================
# Form Fields
# =============================================================================
# Form fields default to None so that a missing field reaches validation
# instead of failing with FastAPI's 422 response.

GenreNameField = Annotated[Optional[str], Form()]
GenreIdField = Annotated[Optional[int], Form()]

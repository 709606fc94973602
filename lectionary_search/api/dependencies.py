"""
Dependency providers shared by the routers.

Overridable via app.dependency_overrides in tests.
"""

from fastapi import Request

from lectionary_search.core.config import Settings, get_settings
from lectionary_search.readings.loader import ReadingStore


def get_reading_store(request: Request) -> ReadingStore:
    """Return the store created by the lifespan handler.

    Before startup has run (or when it was skipped) an empty PENDING store
    is attached, so searches simply find nothing.
    """
    store = getattr(request.app.state, "reading_store", None)
    if store is None:
        store = ReadingStore()
        request.app.state.reading_store = store
    return store


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()

"""Dependency injection: the search engine bound to the application's pool."""

from fastapi import Depends

from catalog.core.config import settings
from catalog.db.base import Database, get_database
from catalog.search.engine import SearchEngine
from catalog.search.store import CatalogStore


def get_search_engine(database: Database = Depends(get_database)) -> SearchEngine:
    store = CatalogStore(database.session_factory, timeout=settings.DB_STATEMENT_TIMEOUT_SECONDS)
    return SearchEngine(store)

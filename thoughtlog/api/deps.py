"""
FastAPI dependencies - wiring between routes and services.

Configuration is read here, at the edge. Services receive explicit
collaborators (store, ProviderSelector) and never consult the environment.
Tests swap get_store and get_selector through app.dependency_overrides.
"""
from typing import Optional

from fastapi import Depends, Header

from thoughtlog.core.auth import resolve_user_id
from thoughtlog.core.config import get_settings
from thoughtlog.database.store import RecordStore, SQLRecordStore
from thoughtlog.llm.selector import ProviderSelector
from thoughtlog.services import CategoryService, EntryService, InsightOrchestrator

_store: Optional[RecordStore] = None


def get_store() -> RecordStore:
    """Get or create the shared record store."""
    global _store
    if _store is None:
        _store = SQLRecordStore()
    return _store


def get_selector() -> ProviderSelector:
    return ProviderSelector.from_settings(get_settings())


def get_orchestrator(
    store: RecordStore = Depends(get_store),
    selector: ProviderSelector = Depends(get_selector),
) -> InsightOrchestrator:
    return InsightOrchestrator(store, selector)


def get_entry_service(
    store: RecordStore = Depends(get_store),
    orchestrator: InsightOrchestrator = Depends(get_orchestrator),
) -> EntryService:
    return EntryService(store, orchestrator)


def get_category_service(store: RecordStore = Depends(get_store)) -> CategoryService:
    return CategoryService(store)


def get_current_user(
    authorization: Optional[str] = Header(default=None),
    store: RecordStore = Depends(get_store),
) -> str:
    """User id for the request's bearer token; raises AuthError (401)."""
    return resolve_user_id(authorization, store)

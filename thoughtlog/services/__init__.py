"""
Services module - Business logic and orchestration.

Services contain the core application logic:
- No HTTP concerns (those belong in api/)
- No SQL (that belongs in database/)
- Orchestrate between the LLM layer and the record store
"""
from thoughtlog.services.category_resolver import CategoryResolver
from thoughtlog.services.insight_service import (
    CategorizationOutcome,
    InsightOrchestrator,
    InsightRun,
    NO_ENTRIES_MESSAGE,
    category_badge,
)
from thoughtlog.services.entry_service import EntryService
from thoughtlog.services.category_service import CategoryService

__all__ = [
    "CategoryResolver",
    "CategorizationOutcome",
    "InsightOrchestrator",
    "InsightRun",
    "NO_ENTRIES_MESSAGE",
    "category_badge",
    "EntryService",
    "CategoryService",
]

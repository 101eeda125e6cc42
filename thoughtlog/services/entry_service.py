"""
Entry Service - logging thoughts.

Creating an entry categorizes it first and writes it only after the
category is resolved, so an entry is never stored half-classified.
"""
from typing import Any, Dict, List, Optional

from thoughtlog.core.exceptions import NotFoundError, ValidationError
from thoughtlog.core.logging_config import get_logger
from thoughtlog.core.validators import validate_content
from thoughtlog.database.store import CATEGORIES, ENTRIES, RecordStore
from thoughtlog.services.insight_service import InsightOrchestrator, category_badge

logger = get_logger(__name__)


class EntryService:
    """Create, list and delete a user's entries."""

    def __init__(self, store: RecordStore, orchestrator: InsightOrchestrator):
        self.store = store
        self.orchestrator = orchestrator

    def create_entry(self, user_id: str, content: Optional[str]) -> Dict[str, Any]:
        """
        Categorize and persist a new entry.

        Returns:
            The stored entry with its category badge

        Raises:
            ValidationError: If content is empty
            NoProviderConfiguredError, ProviderError: Nothing is stored
        """
        is_valid, sanitized, error = validate_content(content)
        if not is_valid:
            raise ValidationError(error, field="content")

        outcome = self.orchestrator.categorize_entry(user_id, sanitized)

        row = self.store.insert(ENTRIES, {
            "user_id": user_id,
            "original_input": content,
            "content": sanitized,
            "category_id": outcome.category_id,
            "ai_reasoning": outcome.reasoning,
        })
        logger.info(f"Created entry {row['id']} for user {user_id} (category={outcome.category_name!r})")

        category = self.store.find_one(CATEGORIES, {"id": outcome.category_id}) if outcome.category_id else None
        return {**row, "category": category_badge(category)}

    def list_entries(self, user_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Entries newest first, each with its category badge if any."""
        categories = {c["id"]: c for c in self.store.find(CATEGORIES, {"user_id": user_id})}
        rows = self.store.find(ENTRIES, {"user_id": user_id}, order_by="created_at", descending=True, limit=limit)
        return [{**row, "category": category_badge(categories.get(row["category_id"]))} for row in rows]

    def delete_entry(self, user_id: str, entry_id: str) -> None:
        if not self.store.delete(ENTRIES, {"id": entry_id, "user_id": user_id}):
            raise NotFoundError("Entry", entry_id)
        logger.info(f"Deleted entry {entry_id} for user {user_id}")

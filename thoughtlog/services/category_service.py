"""
Category Service - user-managed categories.

Auto-created categories come from CategoryResolver; this service covers the
manual side: listing with entry counts, creating, editing and deleting.
"""
from collections import Counter
from typing import Any, Dict, List, Optional

from thoughtlog.core.constants import DEFAULT_CATEGORY_COLOR
from thoughtlog.core.exceptions import NotFoundError, ValidationError
from thoughtlog.core.logging_config import get_logger
from thoughtlog.core.validators import validate_category_name, validate_color, validate_description
from thoughtlog.database.store import CATEGORIES, ENTRIES, RecordStore

logger = get_logger(__name__)


class CategoryService:
    """CRUD over a user's categories."""

    def __init__(self, store: RecordStore):
        self.store = store

    def list_categories(self, user_id: str) -> List[Dict[str, Any]]:
        """Categories ordered by name with a derived entry_count."""
        counts = Counter(
            entry["category_id"]
            for entry in self.store.find(ENTRIES, {"user_id": user_id})
            if entry["category_id"]
        )
        rows = self.store.find(CATEGORIES, {"user_id": user_id}, order_by="name")
        return [{**row, "entry_count": counts.get(row["id"], 0)} for row in rows]

    def create_category(
        self,
        user_id: str,
        name: Optional[str],
        description: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a category.

        Raises:
            ValidationError: Bad name, description or color
            DuplicateRecordError: The user already has a category with this name
        """
        values = self._validated(name=name or "", description=description, color=color or DEFAULT_CATEGORY_COLOR)
        row = self.store.insert(CATEGORIES, {"user_id": user_id, **values})
        logger.info(f"Created category '{row['name']}' for user {user_id}")
        return {**row, "entry_count": 0}

    def update_category(
        self,
        user_id: str,
        category_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Update the given fields; fields left as None are unchanged."""
        values = self._validated(name=name, description=description, color=color)
        if not values:
            raise ValidationError("Nothing to update")

        rows = self.store.update(CATEGORIES, {"id": category_id, "user_id": user_id}, values)
        if not rows:
            raise NotFoundError("Category", category_id)

        entries = self.store.find(ENTRIES, {"user_id": user_id, "category_id": category_id})
        return {**rows[0], "entry_count": len(entries)}

    def delete_category(self, user_id: str, category_id: str) -> None:
        """Detach the category from its entries, then delete it."""
        key = {"id": category_id, "user_id": user_id}
        if self.store.find_one(CATEGORIES, key) is None:
            raise NotFoundError("Category", category_id)

        detached = self.store.update(
            ENTRIES,
            {"user_id": user_id, "category_id": category_id},
            {"category_id": None},
        )
        self.store.delete(CATEGORIES, key)
        logger.info(f"Deleted category {category_id} for user {user_id} ({len(detached)} entries detached)")

    @staticmethod
    def _validated(
        name: Optional[str] = None,
        description: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Dict[str, Any]:
        values: Dict[str, Any] = {}

        if name is not None:
            is_valid, sanitized, error = validate_category_name(name)
            if not is_valid:
                raise ValidationError(error, field="name")
            values["name"] = sanitized

        if description is not None:
            is_valid, sanitized, error = validate_description(description)
            if not is_valid:
                raise ValidationError(error, field="description")
            values["description"] = sanitized

        if color is not None:
            is_valid, error = validate_color(color)
            if not is_valid:
                raise ValidationError(error, field="color")
            values["color"] = color.upper()

        return values

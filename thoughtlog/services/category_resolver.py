"""
Category Resolver - find-or-create a category by name for a user.

Names are exact, case-sensitive keys within a user's scope. Sequential
calls with the same name always return the same id. Two concurrent calls can
both miss the lookup; the store's (user_id, name) unique constraint rejects
the second insert, and the loser re-reads the winner's row.
"""
from typing import Optional

from thoughtlog.core.constants import DEFAULT_CATEGORY_COLOR, MAX_CATEGORY_NAME_LENGTH
from thoughtlog.core.exceptions import DuplicateRecordError
from thoughtlog.core.logging_config import get_logger
from thoughtlog.database.store import CATEGORIES, RecordStore

logger = get_logger(__name__)


class CategoryResolver:
    """
    Resolves a proposed category name to a stable category id.

    Example:
        >>> resolver = CategoryResolver(store)
        >>> resolver.resolve("user-1", "Gym") == resolver.resolve("user-1", "Gym")
        True
    """

    def __init__(self, store: RecordStore):
        self.store = store

    def resolve(self, user_id: str, category_name: Optional[str]) -> Optional[str]:
        """
        Return the id of the user's category with this name, creating it if needed.

        Args:
            user_id: Owner of the category
            category_name: Proposed name; None or blank means "no category"

        Returns:
            Category id, or None when no name was proposed
        """
        if not category_name or not category_name.strip():
            return None

        name = category_name.strip()[:MAX_CATEGORY_NAME_LENGTH]
        key = {"user_id": user_id, "name": name}

        existing = self.store.find_one(CATEGORIES, key)
        if existing:
            logger.debug(f"Category hit: user={user_id} name={name}")
            return existing["id"]

        try:
            created = self.store.insert(CATEGORIES, {
                **key,
                "description": f"Auto-created category for {name}",
                "color": DEFAULT_CATEGORY_COLOR,
            })
        except DuplicateRecordError:
            winner = self.store.find_one(CATEGORIES, key)
            if winner is None:
                raise
            logger.info(f"Category '{name}' was created concurrently, reusing {winner['id']}")
            return winner["id"]

        logger.info(f"Created category '{name}' for user {user_id}: id={created['id']}")
        return created["id"]

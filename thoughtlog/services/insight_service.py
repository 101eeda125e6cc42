"""
Insight Orchestrator - top-level entry point for LLM work.

This service drives the pipeline for both task families:

    store -> PromptBuilder -> ProviderSelector -> ProviderClient
          -> ResponseParser -> (CategoryResolver | store)

Categorization resolves a category id but never writes the Entry; the caller
persists it afterwards. Insight generation either returns transient
GeneratedInsight items (persist=False, the canonical contract) or stores
legacy insight records (persist=True, the compatibility path).
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from thoughtlog.core.constants import INSIGHT_ENTRY_LIMIT
from thoughtlog.core.exceptions import NotFoundError, StoreError
from thoughtlog.core.logging_config import get_logger
from thoughtlog.database.store import CATEGORIES, ENTRIES, INSIGHTS, RecordStore
from thoughtlog.llm.parser import CategorizationResult, LegacyInsightItem, ResponseParser
from thoughtlog.llm.prompts import InsightKind, PromptBuilder, PromptEntry, PromptSpec
from thoughtlog.llm.selector import ProviderSelector
from thoughtlog.services.category_resolver import CategoryResolver

logger = get_logger(__name__)

NO_ENTRIES_MESSAGE = "No entries found to analyze"


@dataclass
class CategorizationOutcome:
    """Result of categorizing an entry for a user."""
    category_id: Optional[str]
    category_name: Optional[str]
    reasoning: str
    is_fallback: bool = False


@dataclass
class InsightRun:
    """
    Result of one generate_insights call.

    insights holds GeneratedInsight dicts when persisted is False and
    stored insight rows when it is True.
    """
    insights: List[Dict[str, Any]] = field(default_factory=list)
    persisted: bool = False
    is_fallback: bool = False
    message: Optional[str] = None


def category_badge(category: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Compact category representation attached to entries and insights."""
    if not category:
        return None
    return {"id": category["id"], "name": category["name"], "color": category["color"]}


class InsightOrchestrator:
    """
    Coordinates prompt building, provider calls and result handling.

    Example:
        >>> orchestrator = InsightOrchestrator(store, selector)
        >>> orchestrator.categorize_entry("user-1", "Went for a 5k run")
        CategorizationOutcome(category_id='...', category_name='Fitness', ...)
    """

    def __init__(
        self,
        store: RecordStore,
        selector: ProviderSelector,
        prompt_builder: Optional[PromptBuilder] = None,
        parser: Optional[ResponseParser] = None,
        resolver: Optional[CategoryResolver] = None,
    ):
        self.store = store
        self.selector = selector
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.parser = parser or ResponseParser()
        self.resolver = resolver or CategoryResolver(store)

    # ------------------------------------------------------------------
    # Categorization
    # ------------------------------------------------------------------

    def categorize(self, content: str) -> CategorizationResult:
        """Ask the provider for a category name; touches no stored data."""
        spec = self.prompt_builder.build_categorization(content)
        result = self.parser.parse(self._invoke(spec), spec)

        logger.info(
            f"Categorized content: category={result.category_name!r}, "
            f"fallback={result.is_fallback}"
        )
        return result

    def categorize_entry(self, user_id: str, content: str) -> CategorizationOutcome:
        """
        Categorize content and resolve the category id for the user.

        Exactly one provider call is made. The provider is selected before
        anything is written, so a missing configuration creates nothing.
        """
        result = self.categorize(content)
        category_id = self.resolver.resolve(user_id, result.category_name)

        return CategorizationOutcome(
            category_id=category_id,
            category_name=result.category_name,
            reasoning=result.reasoning,
            is_fallback=result.is_fallback,
        )

    # ------------------------------------------------------------------
    # Insight generation
    # ------------------------------------------------------------------

    def generate_insights(
        self,
        user_id: str,
        task_kind: Optional[str] = InsightKind.GENERAL.value,
        persist: bool = False,
    ) -> InsightRun:
        """
        Generate insights from the user's most recent entries.

        Args:
            user_id: Owner of the entries
            task_kind: One of insights, actions, suggestions, habits,
                patterns, general; anything else is treated as general
            persist: Store legacy insight records instead of returning
                transient items

        Returns:
            InsightRun; empty with a message when the user has no entries,
            in which case no provider is called
        """
        entries = self.store.find(
            ENTRIES,
            {"user_id": user_id},
            order_by="created_at",
            descending=True,
            limit=INSIGHT_ENTRY_LIMIT,
        )
        if not entries:
            logger.info(f"No entries for user {user_id}, skipping insight generation")
            return InsightRun(persisted=persist, message=NO_ENTRIES_MESSAGE)

        categories = {c["id"]: c for c in self.store.find(CATEGORIES, {"user_id": user_id})}
        prompt_entries = [
            PromptEntry(
                created_at=entry["created_at"],
                content=entry["content"],
                category_name=categories.get(entry["category_id"], {}).get("name"),
            )
            for entry in entries
        ]

        if persist:
            return self._generate_persisted(user_id, prompt_entries)

        kind = InsightKind.parse(task_kind)
        spec = self.prompt_builder.build_insights(prompt_entries, kind)
        result = self.parser.parse(self._invoke(spec), spec)

        by_name = {c["name"]: c for c in categories.values()}
        insights = []
        for item in result.items:
            generated = item.to_dict()
            badge = category_badge(by_name.get(item.category)) if item.category else None
            generated["category"] = {"name": badge["name"], "color": badge["color"]} if badge else None
            insights.append(generated)

        logger.info(
            f"Generated {len(insights)} {kind.value} insight(s) for user {user_id} "
            f"from {len(entries)} entries (fallback={result.is_fallback})"
        )
        return InsightRun(insights=insights, persisted=False, is_fallback=result.is_fallback)

    def _generate_persisted(self, user_id: str, prompt_entries: List[PromptEntry]) -> InsightRun:
        spec = self.prompt_builder.build_legacy_insights(prompt_entries)
        result = self.parser.parse(self._invoke(spec), spec)

        saved = [row for row in (self._save(user_id, item) for item in result.items) if row]

        logger.info(
            f"Persisted {len(saved)}/{len(result.items)} insight(s) for user {user_id} "
            f"(fallback={result.is_fallback})"
        )
        return InsightRun(insights=saved, persisted=True, is_fallback=result.is_fallback)

    def _save(self, user_id: str, item: LegacyInsightItem) -> Optional[Dict[str, Any]]:
        """Store one legacy item; a failed save is logged and skipped."""
        try:
            return self.store.insert(INSIGHTS, {
                "user_id": user_id,
                "insight_text": item.insight_text,
                "action_plan": item.action_plan,
                "category_id": item.category_id,
            })
        except StoreError as e:
            logger.error(f"Error saving insight for user {user_id}: {e}")
            return None

    # ------------------------------------------------------------------
    # Persisted insights
    # ------------------------------------------------------------------

    def list_saved_insights(self, user_id: str) -> List[Dict[str, Any]]:
        """Stored insights newest first, each with its category badge if any."""
        categories = {c["id"]: c for c in self.store.find(CATEGORIES, {"user_id": user_id})}
        rows = self.store.find(INSIGHTS, {"user_id": user_id}, order_by="generated_at", descending=True)
        return [{**row, "category": category_badge(categories.get(row["category_id"]))} for row in rows]

    def delete_saved_insight(self, user_id: str, insight_id: str) -> None:
        if not self.store.delete(INSIGHTS, {"id": insight_id, "user_id": user_id}):
            raise NotFoundError("Insight", insight_id)
        logger.info(f"Deleted insight {insight_id} for user {user_id}")

    def _invoke(self, spec: PromptSpec) -> str:
        client = self.selector.select()
        return client.invoke(spec.system_prompt, spec.user_prompt, spec.options)

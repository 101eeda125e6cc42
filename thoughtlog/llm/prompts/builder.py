"""
Prompt Builder - turns a task and its input data into a provider request.

Three task modes exist:
- CATEGORIZE      : one entry -> {categoryName, reasoning}
- INSIGHTS        : recent entries + kind -> [{type, title, content, priority?}]
- LEGACY_INSIGHTS : recent entries -> [{insight_text, action_plan, category_id}]
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Sequence, Union

from thoughtlog.core.constants import INSIGHT_ENTRY_LIMIT
from thoughtlog.core.logging_config import get_logger
from thoughtlog.llm.client import FAST_TIER, SMART_TIER, GenerationOptions
from thoughtlog.llm.prompts.categorize_prompts import (
    CATEGORIZE_OUTPUT_SCHEMA,
    get_categorize_system_prompt,
    get_categorize_user_prompt,
)
from thoughtlog.llm.prompts.insight_prompts import (
    ACTIONS_FOCUS,
    BASE_INSIGHT_SYSTEM_PROMPT,
    GENERAL_FOCUS,
    HABITS_FOCUS,
    INSIGHT_OUTPUT_SCHEMA,
    INSIGHTS_FOCUS,
    LEGACY_INSIGHT_OUTPUT_SCHEMA,
    LEGACY_INSIGHT_SYSTEM_PROMPT,
    PATTERNS_FOCUS,
    SUGGESTIONS_FOCUS,
    get_insight_user_prompt,
)

logger = get_logger(__name__)

CATEGORIZE_OPTIONS = GenerationOptions(tier=FAST_TIER, temperature=0.3, max_tokens=1000)
INSIGHT_OPTIONS = GenerationOptions(tier=SMART_TIER, temperature=0.7, max_tokens=2000)

ITEM_TYPES = ("insight", "action", "suggestion", "habit", "pattern")


class TaskMode(str, Enum):
    CATEGORIZE = "categorize"
    INSIGHTS = "insights"
    LEGACY_INSIGHTS = "legacy_insights"


class InsightKind(str, Enum):
    """Requested insight flavor; anything unknown is treated as GENERAL."""
    INSIGHTS = "insights"
    ACTIONS = "actions"
    SUGGESTIONS = "suggestions"
    HABITS = "habits"
    PATTERNS = "patterns"
    GENERAL = "general"

    @classmethod
    def parse(cls, value: Optional[str]) -> "InsightKind":
        normalized = (value or "").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            logger.debug(f"Unrecognized insight kind '{value}', using general")
            return cls.GENERAL

    @property
    def item_type(self) -> Optional[str]:
        """Singular item type forced onto results; None for GENERAL."""
        if self is InsightKind.GENERAL:
            return None
        return self.value[:-1]


_FOCUS = {
    InsightKind.INSIGHTS: INSIGHTS_FOCUS,
    InsightKind.ACTIONS: ACTIONS_FOCUS,
    InsightKind.SUGGESTIONS: SUGGESTIONS_FOCUS,
    InsightKind.HABITS: HABITS_FOCUS,
    InsightKind.PATTERNS: PATTERNS_FOCUS,
    InsightKind.GENERAL: GENERAL_FOCUS,
}


@dataclass(frozen=True)
class PromptEntry:
    """The slice of an Entry that is shown to the model."""
    created_at: Union[datetime, str]
    content: str
    category_name: Optional[str] = None


@dataclass(frozen=True)
class PromptSpec:
    """Everything a provider call needs, plus what the parser should expect."""
    mode: TaskMode
    system_prompt: str
    user_prompt: str
    output_schema: str
    options: GenerationOptions
    kind: Optional[InsightKind] = None


class PromptBuilder:
    """
    Renders instruction text and the expected output schema per task.

    Example:
        >>> spec = PromptBuilder().build_insights(entries, "habits")
        >>> spec.kind.item_type
        'habit'
    """

    def __init__(self, entry_limit: int = INSIGHT_ENTRY_LIMIT):
        self.entry_limit = entry_limit

    def build_categorization(self, content: str) -> PromptSpec:
        return PromptSpec(
            mode=TaskMode.CATEGORIZE,
            system_prompt=get_categorize_system_prompt(),
            user_prompt=get_categorize_user_prompt(content),
            output_schema=CATEGORIZE_OUTPUT_SCHEMA,
            options=CATEGORIZE_OPTIONS,
        )

    def build_insights(
        self,
        entries: Sequence[PromptEntry],
        kind: Union[InsightKind, str, None] = InsightKind.GENERAL,
    ) -> PromptSpec:
        if not isinstance(kind, InsightKind):
            kind = InsightKind.parse(kind)

        if kind.item_type:
            type_rule = f'Use "{kind.item_type}" as the type of every item.'
        else:
            type_rule = f"Pick the most fitting type for each item from: {', '.join(ITEM_TYPES)}."

        system_prompt = BASE_INSIGHT_SYSTEM_PROMPT.format(
            focus=_FOCUS[kind],
            type_rule=type_rule,
            schema=INSIGHT_OUTPUT_SCHEMA,
        )
        return PromptSpec(
            mode=TaskMode.INSIGHTS,
            system_prompt=system_prompt,
            user_prompt=get_insight_user_prompt(self.render_entries(entries)),
            output_schema=INSIGHT_OUTPUT_SCHEMA,
            options=INSIGHT_OPTIONS,
            kind=kind,
        )

    def build_legacy_insights(self, entries: Sequence[PromptEntry]) -> PromptSpec:
        return PromptSpec(
            mode=TaskMode.LEGACY_INSIGHTS,
            system_prompt=LEGACY_INSIGHT_SYSTEM_PROMPT,
            user_prompt=get_insight_user_prompt(self.render_entries(entries)),
            output_schema=LEGACY_INSIGHT_OUTPUT_SCHEMA,
            options=INSIGHT_OPTIONS,
        )

    def render_entries(self, entries: Sequence[PromptEntry]) -> str:
        """
        Render entries newest first as "[timestamp] (category) content".

        The category part is omitted for uncategorized entries and at most
        entry_limit entries are included.
        """
        ordered = sorted(entries, key=lambda e: _timestamp_key(e.created_at), reverse=True)
        lines = []
        for entry in ordered[: self.entry_limit]:
            prefix = f"[{_format_timestamp(entry.created_at)}]"
            if entry.category_name:
                prefix = f"{prefix} ({entry.category_name})"
            lines.append(f"{prefix} {entry.content}")
        return "\n\n".join(lines)


def _format_timestamp(value: Union[datetime, str]) -> str:
    return value.isoformat() if isinstance(value, datetime) else str(value)


def _timestamp_key(value: Union[datetime, str]) -> str:
    return _format_timestamp(value)

"""
Response Parser - raw provider text -> typed results.

Parsing never raises. Text that is not JSON in the expected shape is
replaced by a documented fallback value with is_fallback=True, so malformed
model output degrades the answer instead of failing the request.
"""
import json
import re
from dataclasses import asdict, dataclass, field
from typing import Any, List, Optional

from thoughtlog.core.logging_config import get_logger
from thoughtlog.llm.prompts.builder import ITEM_TYPES, InsightKind, PromptSpec, TaskMode

logger = get_logger(__name__)

CATEGORIZE_FALLBACK_REASONING = "Could not parse AI response"
INSIGHT_FALLBACK_TEXT = "Unable to generate structured insights at this time."
INSIGHT_FALLBACK_TITLE = "Insights unavailable"
PRIORITIES = ("high", "medium", "low")
MAX_INSIGHT_ITEMS = 5

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)


@dataclass
class CategorizationResult:
    category_name: Optional[str]
    reasoning: str
    is_fallback: bool = False


@dataclass
class InsightItem:
    type: str
    title: str
    content: str
    priority: Optional[str] = None
    category: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class LegacyInsightItem:
    insight_text: str
    action_plan: Optional[str] = None
    category_id: Optional[str] = None


@dataclass
class InsightsResult:
    items: List[InsightItem] = field(default_factory=list)
    is_fallback: bool = False


@dataclass
class LegacyInsightsResult:
    items: List[LegacyInsightItem] = field(default_factory=list)
    is_fallback: bool = False


class _ContractMismatch(Exception):
    """Internal signal: decoded JSON does not match the contract."""


class ResponseParser:
    """
    Parses provider replies for each TaskMode.

    Example:
        >>> parser = ResponseParser()
        >>> parser.parse_categorization('{"categoryName": "Gym", "reasoning": "lifting"}')
        CategorizationResult(category_name='Gym', reasoning='lifting', is_fallback=False)
    """

    def parse(self, raw_text: Optional[str], spec: PromptSpec):
        """Dispatch on the prompt's task mode."""
        if spec.mode is TaskMode.CATEGORIZE:
            return self.parse_categorization(raw_text)
        if spec.mode is TaskMode.LEGACY_INSIGHTS:
            return self.parse_legacy_insights(raw_text)
        return self.parse_insights(raw_text, spec.kind or InsightKind.GENERAL)

    def parse_categorization(self, raw_text: Optional[str]) -> CategorizationResult:
        try:
            data = _decode(raw_text)
            if not isinstance(data, dict) or "categoryName" not in data:
                raise _ContractMismatch("expected an object with categoryName")

            name = data["categoryName"]
            reasoning = data.get("reasoning")
            if name is not None and not isinstance(name, str):
                raise _ContractMismatch("categoryName must be a string or null")
            if not isinstance(reasoning, str):
                raise _ContractMismatch("reasoning must be a string")

            name = name.strip() if name else None
            return CategorizationResult(category_name=name or None, reasoning=reasoning.strip())
        except (ValueError, _ContractMismatch) as e:
            logger.warning(f"Categorization fallback: {e}")
            return CategorizationResult(
                category_name=None,
                reasoning=CATEGORIZE_FALLBACK_REASONING,
                is_fallback=True,
            )

    def parse_insights(self, raw_text: Optional[str], kind: InsightKind = InsightKind.GENERAL) -> InsightsResult:
        try:
            items = []
            for raw_item in _item_list(_decode(raw_text)):
                item = self._insight_item(raw_item, kind)
                if item is not None:
                    items.append(item)
            if not items:
                raise _ContractMismatch("no valid insight items")
            return InsightsResult(items=items[:MAX_INSIGHT_ITEMS])
        except (ValueError, _ContractMismatch) as e:
            logger.warning(f"Insight fallback ({kind.value}): {e}")
            return InsightsResult(
                items=[InsightItem(
                    type=kind.item_type or "insight",
                    title=INSIGHT_FALLBACK_TITLE,
                    content=INSIGHT_FALLBACK_TEXT,
                )],
                is_fallback=True,
            )

    def parse_legacy_insights(self, raw_text: Optional[str]) -> LegacyInsightsResult:
        try:
            items = []
            for raw_item in _item_list(_decode(raw_text)):
                if not isinstance(raw_item, dict) or not _non_empty(raw_item.get("insight_text")):
                    continue
                items.append(LegacyInsightItem(
                    insight_text=raw_item["insight_text"].strip(),
                    action_plan=_optional_str(raw_item.get("action_plan")),
                    category_id=_verbatim_id(raw_item.get("category_id")),
                ))
            if not items:
                raise _ContractMismatch("no valid legacy insight items")
            return LegacyInsightsResult(items=items[:MAX_INSIGHT_ITEMS])
        except (ValueError, _ContractMismatch) as e:
            logger.warning(f"Legacy insight fallback: {e}")
            return LegacyInsightsResult(
                items=[LegacyInsightItem(insight_text=INSIGHT_FALLBACK_TEXT)],
                is_fallback=True,
            )

    @staticmethod
    def _insight_item(raw_item: Any, kind: InsightKind) -> Optional[InsightItem]:
        if not isinstance(raw_item, dict):
            return None
        title, content = raw_item.get("title"), raw_item.get("content")
        if not _non_empty(title) or not _non_empty(content):
            return None

        item_type = kind.item_type
        if item_type is None:
            proposed = raw_item.get("type")
            proposed = proposed.strip().lower() if isinstance(proposed, str) else ""
            item_type = proposed if proposed in ITEM_TYPES else "insight"

        priority = raw_item.get("priority")
        priority = priority.strip().lower() if isinstance(priority, str) else None

        return InsightItem(
            type=item_type,
            title=title.strip(),
            content=content.strip(),
            priority=priority if priority in PRIORITIES else None,
            category=_optional_str(raw_item.get("category")),
        )


def _decode(raw_text: Optional[str]) -> Any:
    """Strict JSON decoding after removing a surrounding code fence."""
    if raw_text is None:
        raise _ContractMismatch("empty response")
    text = raw_text.strip()
    match = _FENCE_RE.match(text)
    if match:
        text = match.group(1)
    try:
        return json.loads(text)
    except RecursionError as e:
        raise _ContractMismatch("reply is nested too deeply") from e


def _item_list(data: Any) -> list:
    if isinstance(data, dict) and isinstance(data.get("insights"), list):
        return data["insights"]
    if isinstance(data, list):
        return data
    raise _ContractMismatch("expected a JSON array of items")


def _non_empty(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _optional_str(value: Any) -> Optional[str]:
    return value.strip() or None if isinstance(value, str) else None


def _verbatim_id(value: Any) -> Optional[str]:
    """Scalar ids are kept as given (numbers as text); null, blank and containers become None."""
    if value is None or isinstance(value, (dict, list)):
        return None
    text = value if isinstance(value, str) else json.dumps(value)
    return text if text.strip() else None

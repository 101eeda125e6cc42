"""Tests for ResponseParser"""

import json

import pytest

from thoughtlog.llm.parser import (
    CATEGORIZE_FALLBACK_REASONING,
    INSIGHT_FALLBACK_TEXT,
    MAX_INSIGHT_ITEMS,
    ResponseParser,
)
from thoughtlog.llm.prompts import InsightKind, PromptBuilder


DEEPLY_NESTED = "[" * 200000 + "]" * 200000


@pytest.fixture
def parser():
    return ResponseParser()


class TestParseCategorization:
    """Tests for categorization replies"""

    def test_valid_reply(self, parser):
        result = parser.parse_categorization('{"categoryName": "Fitness", "reasoning": "Running is exercise"}')
        assert result.category_name == "Fitness"
        assert result.reasoning == "Running is exercise"
        assert result.is_fallback is False

    def test_null_category_is_not_a_fallback(self, parser):
        result = parser.parse_categorization('{"categoryName": null, "reasoning": "No clear theme"}')
        assert result.category_name is None
        assert result.is_fallback is False

    def test_blank_category_becomes_none(self, parser):
        result = parser.parse_categorization('{"categoryName": "  ", "reasoning": "meh"}')
        assert result.category_name is None

    def test_code_fence_is_stripped(self, parser):
        raw = '```json\n{"categoryName": "Work", "reasoning": "Job search"}\n```'
        result = parser.parse_categorization(raw)
        assert result.category_name == "Work"
        assert result.is_fallback is False

    @pytest.mark.parametrize("raw", [
        "I think this is about fitness",
        "",
        None,
        "[]",
        '{"reasoning": "missing name"}',
        '{"categoryName": 42, "reasoning": "wrong type"}',
        '{"categoryName": "Gym"}',
    ])
    def test_malformed_reply_falls_back(self, parser, raw):
        result = parser.parse_categorization(raw)
        assert result.category_name is None
        assert result.reasoning == CATEGORIZE_FALLBACK_REASONING
        assert result.is_fallback is True

    def test_deeply_nested_reply_falls_back(self, parser):
        result = parser.parse_categorization(DEEPLY_NESTED)
        assert result.is_fallback is True
        assert result.reasoning == CATEGORIZE_FALLBACK_REASONING

    def test_dispatch_by_spec(self, parser):
        spec = PromptBuilder().build_categorization("Went for a run")
        result = parser.parse('{"categoryName": "Fitness", "reasoning": "run"}', spec)
        assert result.category_name == "Fitness"


class TestParseInsights:
    """Tests for transient insight replies"""

    def test_type_is_forced_to_requested_kind(self, parser):
        raw = json.dumps([
            {"type": "pattern", "title": "Sleep", "content": "Sleep more", "priority": "high"},
            {"type": "insight", "title": "Walks", "content": "Walk daily"},
        ])
        result = parser.parse_insights(raw, InsightKind.HABITS)
        assert [item.type for item in result.items] == ["habit", "habit"]
        assert result.items[0].priority == "high"
        assert result.items[1].priority is None

    def test_general_keeps_valid_model_type(self, parser):
        raw = json.dumps([
            {"type": "Pattern", "title": "A", "content": "a"},
            {"type": "nonsense", "title": "B", "content": "b"},
            {"title": "C", "content": "c"},
        ])
        result = parser.parse_insights(raw, InsightKind.GENERAL)
        assert [item.type for item in result.items] == ["pattern", "insight", "insight"]

    def test_wrapped_object_is_accepted(self, parser):
        raw = json.dumps({"insights": [{"title": "A", "content": "a", "category": "Work"}]})
        result = parser.parse_insights(raw, InsightKind.ACTIONS)
        assert len(result.items) == 1
        assert result.items[0].type == "action"
        assert result.items[0].category == "Work"

    def test_invalid_priority_is_dropped(self, parser):
        raw = json.dumps([{"title": "A", "content": "a", "priority": "urgent"}])
        result = parser.parse_insights(raw, InsightKind.INSIGHTS)
        assert result.items[0].priority is None

    def test_items_missing_title_or_content_are_skipped(self, parser):
        raw = json.dumps([
            {"title": "", "content": "a"},
            {"title": "B"},
            "not an object",
            {"title": "Kept", "content": "kept"},
        ])
        result = parser.parse_insights(raw, InsightKind.PATTERNS)
        assert [item.title for item in result.items] == ["Kept"]

    def test_at_most_five_items(self, parser):
        raw = json.dumps([{"title": f"T{i}", "content": f"c{i}"} for i in range(8)])
        result = parser.parse_insights(raw, InsightKind.SUGGESTIONS)
        assert len(result.items) == MAX_INSIGHT_ITEMS

    @pytest.mark.parametrize("raw", ["not json", "{}", "[]", '[{"title": "no content"}]'])
    def test_fallback_single_item(self, parser, raw):
        result = parser.parse_insights(raw, InsightKind.ACTIONS)
        assert result.is_fallback is True
        assert len(result.items) == 1
        assert result.items[0].type == "action"
        assert result.items[0].content == INSIGHT_FALLBACK_TEXT

    def test_deeply_nested_reply_falls_back(self, parser):
        result = parser.parse_insights(DEEPLY_NESTED, InsightKind.HABITS)
        assert result.is_fallback is True
        assert result.items[0].type == "habit"

    def test_general_fallback_type_is_insight(self, parser):
        result = parser.parse_insights("oops", InsightKind.GENERAL)
        assert result.items[0].type == "insight"


class TestParseLegacyInsights:
    """Tests for persisted-insight replies"""

    def test_valid_reply(self, parser):
        raw = json.dumps([
            {"insight_text": "You run on weekends", "action_plan": "Add a weekday run", "category_id": "abc"},
            {"insight_text": "Job search is steady", "action_plan": None, "category_id": None},
        ])
        result = parser.parse_legacy_insights(raw)
        assert result.is_fallback is False
        assert result.items[0].category_id == "abc"
        assert result.items[1].action_plan is None

    def test_fallback(self, parser):
        result = parser.parse_legacy_insights("Sorry, I cannot help")
        assert result.is_fallback is True
        assert result.items[0].insight_text == INSIGHT_FALLBACK_TEXT
        assert result.items[0].action_plan is None

    def test_deeply_nested_reply_falls_back(self, parser):
        result = parser.parse_legacy_insights(DEEPLY_NESTED)
        assert result.is_fallback is True
        assert result.items[0].insight_text == INSIGHT_FALLBACK_TEXT

    @pytest.mark.parametrize("category_id,expected", [
        (7, "7"),
        ("cat-42", "cat-42"),
        ("", None),
        (None, None),
        ({"id": 1}, None),
    ])
    def test_category_id_passed_through(self, parser, category_id, expected):
        raw = json.dumps([{"insight_text": "x", "action_plan": "y", "category_id": category_id}])
        result = parser.parse_legacy_insights(raw)
        assert result.items[0].category_id == expected

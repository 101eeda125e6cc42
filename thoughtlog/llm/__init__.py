"""
LLM module - Language model integration.

This module handles all LLM interactions:
- Provider selection by configured credentials (OpenAI first, then Claude)
- Prompt construction per task mode
- API calls through provider adapters
- Parsing replies into typed results with graceful fallbacks
"""
from thoughtlog.llm.client import (
    ClaudeClient,
    GenerationOptions,
    OpenAIClient,
    ProviderClient,
)
from thoughtlog.llm.selector import ProviderCredentials, ProviderSelector
from thoughtlog.llm.parser import (
    CategorizationResult,
    InsightItem,
    InsightsResult,
    LegacyInsightItem,
    LegacyInsightsResult,
    ResponseParser,
)

__all__ = [
    "ClaudeClient",
    "GenerationOptions",
    "OpenAIClient",
    "ProviderClient",
    "ProviderCredentials",
    "ProviderSelector",
    "CategorizationResult",
    "InsightItem",
    "InsightsResult",
    "LegacyInsightItem",
    "LegacyInsightsResult",
    "ResponseParser",
]

"""
Prompts module - LLM prompt templates and the builder that assembles them.

Prompts are stored as separate Python files for:
- Version control of prompt changes
- Clear documentation of prompt purpose
"""
from thoughtlog.llm.prompts.builder import (
    InsightKind,
    ITEM_TYPES,
    PromptBuilder,
    PromptEntry,
    PromptSpec,
    TaskMode,
)

__all__ = [
    "InsightKind",
    "ITEM_TYPES",
    "PromptBuilder",
    "PromptEntry",
    "PromptSpec",
    "TaskMode",
]

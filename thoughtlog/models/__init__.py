"""
Models module - Pydantic schemas for data validation.

This module defines:
- Request models: Input validation for API endpoints
- Response models: Output formatting for API responses
"""
from thoughtlog.models.common import ErrorResponse, HealthResponse
from thoughtlog.models.insights import (
    CategorizeRequest,
    CategorizeResponse,
    CategoryBadge,
    CategoryTag,
    GenerateInsightsRequest,
    GenerateInsightsResponse,
    GeneratedInsight,
    SavedInsight,
)
from thoughtlog.models.entries import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryUpdateRequest,
    EntryCreateRequest,
    EntryResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "CategorizeRequest",
    "CategorizeResponse",
    "CategoryBadge",
    "CategoryTag",
    "GenerateInsightsRequest",
    "GenerateInsightsResponse",
    "GeneratedInsight",
    "SavedInsight",
    "CategoryCreateRequest",
    "CategoryResponse",
    "CategoryUpdateRequest",
    "EntryCreateRequest",
    "EntryResponse",
]

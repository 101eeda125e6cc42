"""
Request and Response models for the categorize-entry, generate-insights
and insights endpoints.
"""
from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field


class CategorizeRequest(BaseModel):
    """
    Request model for /categorize-entry.

    content is optional at the schema level so that a missing or blank value
    is reported as a 400 by the route instead of a schema error.
    """
    content: Optional[str] = Field(
        default=None,
        description="The free-text thought to categorize",
        examples=["Went for a 5k run this morning"]
    )


class CategorizeResponse(BaseModel):
    """categoryName is null when the model found no clear theme."""
    categoryName: Optional[str] = None
    reasoning: str


class GenerateInsightsRequest(BaseModel):
    """Optional body for /generate-insights."""
    type: Optional[str] = Field(
        default="general",
        description="insights, actions, suggestions, habits, patterns or general; "
                    "unknown values fall back to general"
    )
    persist: bool = Field(
        default=False,
        description="Store legacy insight records instead of returning transient items"
    )


class CategoryTag(BaseModel):
    name: str
    color: str


class CategoryBadge(CategoryTag):
    id: str


class GeneratedInsight(BaseModel):
    """Transient insight item; never stored."""
    type: Literal["insight", "action", "suggestion", "habit", "pattern"]
    title: str
    content: str
    priority: Optional[Literal["high", "medium", "low"]] = None
    category: Optional[CategoryTag] = None


class SavedInsight(BaseModel):
    """Persisted insight record."""
    id: str
    user_id: str
    category_id: Optional[str] = None
    insight_text: str
    action_plan: Optional[str] = None
    generated_at: datetime
    category: Optional[CategoryBadge] = None


class GenerateInsightsResponse(BaseModel):
    insights: Union[List[GeneratedInsight], List[SavedInsight]] = Field(default_factory=list)
    fallback: bool = Field(
        default=False,
        description="True when the model reply could not be parsed and a placeholder was returned"
    )
    message: Optional[str] = None

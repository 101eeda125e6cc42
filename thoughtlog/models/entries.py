"""
Request and Response models for entries and categories.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from thoughtlog.models.insights import CategoryBadge


class EntryCreateRequest(BaseModel):
    content: Optional[str] = Field(
        default=None,
        description="The thought to log; it is categorized before being stored",
        examples=["Applied to two backend roles today"]
    )


class EntryResponse(BaseModel):
    id: str
    user_id: str
    original_input: str
    content: str
    category_id: Optional[str] = None
    ai_reasoning: Optional[str] = None
    created_at: datetime
    category: Optional[CategoryBadge] = None


class CategoryCreateRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = Field(default=None, description="Hex color from the fixed palette")


class CategoryUpdateRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None


class CategoryResponse(BaseModel):
    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    color: str
    created_at: datetime
    entry_count: int = 0

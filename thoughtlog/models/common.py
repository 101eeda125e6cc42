"""
Shared response models.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the /health endpoints."""
    status: str = Field(default="healthy")
    version: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    providers: Optional[List[str]] = Field(
        default=None,
        description="Configured provider slots in priority order (readiness only)"
    )
    database: Optional[bool] = Field(default=None, description="Database reachable (readiness only)")


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str
    kind: str
    retryable: bool = False

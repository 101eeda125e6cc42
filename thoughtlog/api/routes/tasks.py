"""
Task Routes - the two LLM task endpoints.

- POST /categorize-entry  : suggest a category for a piece of text
- POST /generate-insights : insights over the caller's recent entries

OPTIONS preflight for both is answered by CORSHeadersMiddleware.
"""
from typing import Optional

from fastapi import APIRouter, Depends

from thoughtlog.api.deps import get_current_user, get_orchestrator
from thoughtlog.core.exceptions import InternalError, ThoughtlogError, ValidationError
from thoughtlog.core.logging_config import get_logger
from thoughtlog.core.validators import validate_content
from thoughtlog.models.common import ErrorResponse
from thoughtlog.models.insights import (
    CategorizeRequest,
    CategorizeResponse,
    GenerateInsightsRequest,
    GenerateInsightsResponse,
    GeneratedInsight,
    SavedInsight,
)
from thoughtlog.services import InsightOrchestrator

logger = get_logger(__name__)

router = APIRouter(
    tags=["Tasks"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        500: {"model": ErrorResponse, "description": "Provider or configuration failure"},
    }
)


@router.post(
    "/categorize-entry",
    response_model=CategorizeResponse,
    summary="Suggest a category for a thought",
    description="""
    Ask the configured LLM provider for a broad, reusable category.

    `categoryName` is null when no clear theme applies. A reply that cannot
    be parsed yields `categoryName: null` with reasoning
    "Could not parse AI response" instead of an error.
    """
)
def categorize_entry(
    request: Optional[CategorizeRequest] = None,
    orchestrator: InsightOrchestrator = Depends(get_orchestrator),
) -> CategorizeResponse:
    is_valid, sanitized, error = validate_content(request.content if request else None)
    if not is_valid:
        raise ValidationError(error, field="content")

    logger.info(f"Categorize request: content_length={len(sanitized)}")

    try:
        result = orchestrator.categorize(sanitized)
    except ThoughtlogError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error in categorize-entry: {e}")
        raise InternalError(str(e)) from e

    return CategorizeResponse(categoryName=result.category_name, reasoning=result.reasoning)


@router.post(
    "/generate-insights",
    response_model=GenerateInsightsResponse,
    responses={401: {"model": ErrorResponse, "description": "Missing or unknown token"}},
    summary="Generate insights from recent entries",
    description="""
    Analyze the caller's 50 most recent entries.

    **Body (optional):**
    - `type`: insights, actions, suggestions, habits, patterns or general
      (default). Unknown values use the general instruction.
    - `persist`: false (default) returns transient items
      `{type, title, content, priority, category}`; true stores legacy
      `{insight_text, action_plan, category_id}` records and returns them.

    With no entries the response is an empty list with a message and no
    provider is called.
    """
)
def generate_insights(
    request: Optional[GenerateInsightsRequest] = None,
    user_id: str = Depends(get_current_user),
    orchestrator: InsightOrchestrator = Depends(get_orchestrator),
) -> GenerateInsightsResponse:
    request = request or GenerateInsightsRequest()

    logger.info(f"Insight request: user={user_id}, type={request.type}, persist={request.persist}")

    try:
        run = orchestrator.generate_insights(user_id, request.type, persist=request.persist)
    except ThoughtlogError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error in generate-insights: {e}")
        raise InternalError(str(e)) from e

    if run.persisted:
        insights = [SavedInsight(**row) for row in run.insights]
    else:
        insights = [GeneratedInsight(**item) for item in run.insights]

    return GenerateInsightsResponse(insights=insights, fallback=run.is_fallback, message=run.message)

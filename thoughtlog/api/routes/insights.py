"""
Insight Routes - stored insights produced with persist=true.
"""
from typing import List

from fastapi import APIRouter, Depends, Response

from thoughtlog.api.deps import get_current_user, get_orchestrator
from thoughtlog.models.common import ErrorResponse
from thoughtlog.models.insights import SavedInsight
from thoughtlog.services import InsightOrchestrator

router = APIRouter(
    prefix="/insights",
    tags=["Insights"],
    responses={401: {"model": ErrorResponse, "description": "Missing or unknown token"}},
)


@router.get("", response_model=List[SavedInsight], summary="List stored insights newest first")
def list_insights(
    user_id: str = Depends(get_current_user),
    orchestrator: InsightOrchestrator = Depends(get_orchestrator),
) -> List[SavedInsight]:
    return [SavedInsight(**row) for row in orchestrator.list_saved_insights(user_id)]


@router.delete("/{insight_id}", status_code=204, summary="Delete a stored insight")
def delete_insight(
    insight_id: str,
    user_id: str = Depends(get_current_user),
    orchestrator: InsightOrchestrator = Depends(get_orchestrator),
) -> Response:
    orchestrator.delete_saved_insight(user_id, insight_id)
    return Response(status_code=204)

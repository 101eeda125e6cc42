"""
Entry Routes - logging and browsing thoughts.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from thoughtlog.api.deps import get_current_user, get_entry_service
from thoughtlog.core.exceptions import InternalError, ThoughtlogError
from thoughtlog.core.logging_config import get_logger
from thoughtlog.models.common import ErrorResponse
from thoughtlog.models.entries import EntryCreateRequest, EntryResponse
from thoughtlog.services import EntryService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/entries",
    tags=["Entries"],
    responses={401: {"model": ErrorResponse, "description": "Missing or unknown token"}},
)


@router.get("", response_model=List[EntryResponse], summary="List entries newest first")
def list_entries(
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    user_id: str = Depends(get_current_user),
    service: EntryService = Depends(get_entry_service),
) -> List[EntryResponse]:
    return [EntryResponse(**row) for row in service.list_entries(user_id, limit=limit)]


@router.post(
    "",
    response_model=EntryResponse,
    status_code=201,
    summary="Log a thought",
    description="""
    The content is categorized first; the entry is stored only after its
    category has been found or created. If no provider is configured or the
    provider call fails, nothing is stored.
    """
)
def create_entry(
    request: EntryCreateRequest,
    user_id: str = Depends(get_current_user),
    service: EntryService = Depends(get_entry_service),
) -> EntryResponse:
    try:
        row = service.create_entry(user_id, request.content)
    except ThoughtlogError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error creating entry: {e}")
        raise InternalError(str(e)) from e

    return EntryResponse(**row)


@router.delete("/{entry_id}", status_code=204, summary="Delete an entry")
def delete_entry(
    entry_id: str,
    user_id: str = Depends(get_current_user),
    service: EntryService = Depends(get_entry_service),
) -> Response:
    service.delete_entry(user_id, entry_id)
    return Response(status_code=204)

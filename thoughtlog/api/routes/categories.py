"""
Category Routes - manual category management.
"""
from typing import List

from fastapi import APIRouter, Depends, Response

from thoughtlog.api.deps import get_category_service, get_current_user
from thoughtlog.models.common import ErrorResponse
from thoughtlog.models.entries import CategoryCreateRequest, CategoryResponse, CategoryUpdateRequest
from thoughtlog.services import CategoryService

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
    responses={
        401: {"model": ErrorResponse, "description": "Missing or unknown token"},
        409: {"model": ErrorResponse, "description": "Category name already used"},
    },
)


@router.get("", response_model=List[CategoryResponse], summary="List categories with entry counts")
def list_categories(
    user_id: str = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> List[CategoryResponse]:
    return [CategoryResponse(**row) for row in service.list_categories(user_id)]


@router.post("", response_model=CategoryResponse, status_code=201, summary="Create a category")
def create_category(
    request: CategoryCreateRequest,
    user_id: str = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    row = service.create_category(user_id, request.name, request.description, request.color)
    return CategoryResponse(**row)


@router.put("/{category_id}", response_model=CategoryResponse, summary="Update a category")
def update_category(
    category_id: str,
    request: CategoryUpdateRequest,
    user_id: str = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    row = service.update_category(user_id, category_id, request.name, request.description, request.color)
    return CategoryResponse(**row)


@router.delete("/{category_id}", status_code=204, summary="Delete a category")
def delete_category(
    category_id: str,
    user_id: str = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> Response:
    """Entries keep existing and become uncategorized."""
    service.delete_category(user_id, category_id)
    return Response(status_code=204)

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from catalog.api.dependencies import get_category_service
from catalog.api.v1.params import PageParams, page_params
from catalog.schemas import (
    ApiResponse,
    CategoryCreate,
    CategoryRead,
    CategoryUpdate,
    PaginatedResponse,
)
from catalog.security import require_admin
from catalog.services.categories import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post(
    "",
    response_model=ApiResponse[CategoryRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
    dependencies=[Depends(require_admin)],
)
async def create_category(
    payload: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
):
    category = await service.create_category(payload)
    return ApiResponse(message="Category created successfully", data=category)


@router.get("", response_model=PaginatedResponse[CategoryRead], summary="List categories")
async def list_categories(
    params: PageParams = Depends(page_params),
    search: Optional[str] = Query(None, max_length=120),
    active: Optional[bool] = Query(None),
    service: CategoryService = Depends(get_category_service),
):
    categories, total = await service.list_categories(
        page=params.page,
        limit=params.limit,
        search=search,
        is_active=active,
    )
    return PaginatedResponse(
        message="Categories fetched successfully",
        data=categories,
        pagination=params.pagination(total, "Categories"),
    )


@router.get("/{category_id}", response_model=ApiResponse[CategoryRead], summary="Get category")
async def get_category(
    category_id: UUID,
    service: CategoryService = Depends(get_category_service),
):
    category = await service.get_category(category_id)
    return ApiResponse(message="Category fetched successfully", data=category)


@router.patch(
    "/{category_id}",
    response_model=ApiResponse[CategoryRead],
    summary="Update category",
    dependencies=[Depends(require_admin)],
)
async def update_category(
    category_id: UUID,
    payload: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
):
    category = await service.update_category(category_id, payload)
    return ApiResponse(message="Category updated successfully", data=category)


@router.delete(
    "/{category_id}",
    response_model=ApiResponse[None],
    summary="Delete category",
    dependencies=[Depends(require_admin)],
)
async def delete_category(
    category_id: UUID,
    service: CategoryService = Depends(get_category_service),
):
    await service.delete_category(category_id)
    return ApiResponse(message="Category deleted successfully")

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from catalog.api.dependencies import get_banner_service
from catalog.api.v1.params import PageParams, page_params, read_uploads
from catalog.core import Settings, get_settings
from catalog.schemas import (
    ApiResponse,
    BannerFields,
    BannerRead,
    BannerUpdate,
    PaginatedResponse,
)
from catalog.security import require_admin
from catalog.services.banners import BannerService
from catalog.services.upload import RawFile

router = APIRouter(prefix="/banners", tags=["banners"])


async def _single_image(image: Optional[UploadFile], settings: Settings) -> Optional[RawFile]:
    files = await read_uploads([image] if image is not None else None, settings.max_image_bytes)
    return files[0] if files else None


@router.post(
    "",
    response_model=ApiResponse[BannerRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create banner with image",
    dependencies=[Depends(require_admin)],
)
async def create_banner(
    title: str = Form(...),
    category_id: UUID = Form(..., alias="categoryId"),
    subtitle: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    is_active: bool = Form(True, alias="isActive"),
    image: Optional[UploadFile] = File(None),
    service: BannerService = Depends(get_banner_service),
    settings: Settings = Depends(get_settings),
):
    fields = BannerFields(
        title=title,
        subtitle=subtitle,
        description=description,
        is_active=is_active,
        category_id=category_id,
    )
    banner = await service.create_banner_with_asset(fields, await _single_image(image, settings))
    return ApiResponse(message="Banner created successfully", data=banner)


@router.get("", response_model=PaginatedResponse[BannerRead], summary="List banners")
async def list_banners(
    params: PageParams = Depends(page_params),
    search: Optional[str] = Query(None, max_length=255),
    category_id: Optional[UUID] = Query(None, alias="categoryId"),
    active: Optional[bool] = Query(None),
    service: BannerService = Depends(get_banner_service),
):
    banners, total = await service.list_banners(
        page=params.page,
        limit=params.limit,
        search=search,
        category_id=category_id,
        is_active=active,
    )
    return PaginatedResponse(
        message="Banners fetched successfully",
        data=banners,
        pagination=params.pagination(total, "Banners"),
    )


@router.get("/{banner_id}", response_model=ApiResponse[BannerRead], summary="Get banner")
async def get_banner(
    banner_id: UUID,
    service: BannerService = Depends(get_banner_service),
):
    banner = await service.get_banner(banner_id)
    return ApiResponse(message="Banner fetched successfully", data=banner)


@router.patch(
    "/{banner_id}",
    response_model=ApiResponse[BannerRead],
    summary="Update banner; a new image replaces the current one",
    dependencies=[Depends(require_admin)],
)
async def update_banner(
    banner_id: UUID,
    title: Optional[str] = Form(None),
    category_id: Optional[UUID] = Form(None, alias="categoryId"),
    subtitle: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    is_active: Optional[bool] = Form(None, alias="isActive"),
    image: Optional[UploadFile] = File(None),
    service: BannerService = Depends(get_banner_service),
    settings: Settings = Depends(get_settings),
):
    sent = {
        "title": title,
        "category_id": category_id,
        "subtitle": subtitle,
        "description": description,
        "is_active": is_active,
    }
    update = BannerUpdate(**{name: value for name, value in sent.items() if value is not None})
    banner = await service.update_banner(banner_id, update, await _single_image(image, settings))
    return ApiResponse(message="Banner updated successfully", data=banner)


@router.delete(
    "/{banner_id}",
    response_model=ApiResponse[None],
    summary="Delete banner and its image",
    dependencies=[Depends(require_admin)],
)
async def delete_banner(
    banner_id: UUID,
    service: BannerService = Depends(get_banner_service),
):
    await service.delete_banner(banner_id)
    return ApiResponse(message="Banner deleted successfully")

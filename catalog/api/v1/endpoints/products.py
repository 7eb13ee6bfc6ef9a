"""Product endpoints.

Create and update are multipart: scalar fields as form fields,
``specifications``/``instructions`` as JSON-encoded arrays and up to
``max_images_per_request`` files under ``images``.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status

from catalog.api.dependencies import get_product_service
from catalog.api.v1.params import PageParams, page_params, read_uploads
from catalog.core import Settings, get_settings
from catalog.schemas import (
    ApiResponse,
    PaginatedResponse,
    ProductFields,
    ProductRead,
    ProductUpdate,
)
from catalog.schemas.forms import parse_instructions, parse_specifications
from catalog.security import require_admin
from catalog.services.products import ProductService

router = APIRouter(prefix="/products", tags=["products"])

# form alias → ProductUpdate field that an empty value clears
CLEARABLE_PRODUCT_FIELDS = {"description": "description", "discountedPrice": "discounted_price"}


@router.post(
    "",
    response_model=ApiResponse[ProductRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create product with images",
    dependencies=[Depends(require_admin)],
)
async def create_product(
    title: str = Form(...),
    price: float = Form(...),
    category_id: UUID = Form(..., alias="categoryId"),
    description: Optional[str] = Form(None),
    discounted_price: Optional[float] = Form(None, alias="discountedPrice"),
    is_available: bool = Form(True, alias="isAvailable"),
    rating: float = Form(0.0),
    specifications: Optional[str] = Form(None),
    instructions: Optional[str] = Form(None),
    images: Optional[list[UploadFile]] = File(None),
    service: ProductService = Depends(get_product_service),
    settings: Settings = Depends(get_settings),
):
    fields = ProductFields(
        title=title,
        description=description,
        price=price,
        discounted_price=discounted_price,
        is_available=is_available,
        rating=rating,
        category_id=category_id,
        specifications=parse_specifications(specifications) or [],
        instructions=parse_instructions(instructions) or [],
    )
    files = await read_uploads(images, settings.max_image_bytes)
    product = await service.create_product_with_assets(fields, files)
    return ApiResponse(message="Product created successfully", data=product)


@router.get("", response_model=PaginatedResponse[ProductRead], summary="List products")
async def list_products(
    params: PageParams = Depends(page_params),
    search: Optional[str] = Query(None, max_length=255),
    category_id: Optional[UUID] = Query(None, alias="categoryId"),
    is_available: Optional[bool] = Query(None, alias="isAvailable"),
    service: ProductService = Depends(get_product_service),
):
    products, total = await service.list_products(
        page=params.page,
        limit=params.limit,
        search=search,
        category_id=category_id,
        is_available=is_available,
    )
    return PaginatedResponse(
        message="Products fetched successfully",
        data=products,
        pagination=params.pagination(total, "Products"),
    )


@router.get("/{product_id}", response_model=ApiResponse[ProductRead], summary="Get product")
async def get_product(
    product_id: UUID,
    service: ProductService = Depends(get_product_service),
):
    product = await service.get_product(product_id)
    return ApiResponse(message="Product fetched successfully", data=product)


@router.patch(
    "/{product_id}",
    response_model=ApiResponse[ProductRead],
    summary="Update product; new images replace the current list",
    dependencies=[Depends(require_admin)],
)
async def update_product(
    request: Request,
    product_id: UUID,
    title: Optional[str] = Form(None),
    price: Optional[float] = Form(None),
    category_id: Optional[UUID] = Form(None, alias="categoryId"),
    description: Optional[str] = Form(None),
    discounted_price: Optional[float] = Form(None, alias="discountedPrice"),
    is_available: Optional[bool] = Form(None, alias="isAvailable"),
    rating: Optional[float] = Form(None),
    specifications: Optional[str] = Form(None),
    instructions: Optional[str] = Form(None),
    images: Optional[list[UploadFile]] = File(None),
    service: ProductService = Depends(get_product_service),
    settings: Settings = Depends(get_settings),
):
    """Omitted fields are left alone; an empty ``description`` or ``discountedPrice`` clears it."""
    sent = {
        "title": title,
        "price": price,
        "category_id": category_id,
        "description": description,
        "discounted_price": discounted_price,
        "is_available": is_available,
        "rating": rating,
        "specifications": parse_specifications(specifications),
        "instructions": parse_instructions(instructions),
    }
    changes = {name: value for name, value in sent.items() if value is not None}
    # FastAPI reads an empty form value as "not sent"; check the raw form for explicit clears
    form = await request.form()
    for alias, name in CLEARABLE_PRODUCT_FIELDS.items():
        if form.get(alias) == "":
            changes[name] = None
    update = ProductUpdate(**changes)
    files = await read_uploads(images, settings.max_image_bytes)
    product = await service.update_product(product_id, update, files)
    return ApiResponse(message="Product updated successfully", data=product)


@router.delete(
    "/{product_id}",
    response_model=ApiResponse[None],
    summary="Delete product and its images",
    dependencies=[Depends(require_admin)],
)
async def delete_product(
    product_id: UUID,
    service: ProductService = Depends(get_product_service),
):
    await service.delete_product(product_id)
    return ApiResponse(message="Product deleted successfully")

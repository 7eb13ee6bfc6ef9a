"""FastAPI dependency providers."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core import Settings, get_settings
from catalog.database.session import get_db_session
from catalog.services.auth import AuthService
from catalog.services.banners import BannerService
from catalog.services.categories import CategoryService
from catalog.services.compressor import ImageCompressor
from catalog.services.products import ProductService
from catalog.services.storage import StorageAdapter, create_s3_client
from catalog.services.upload import UploadConstraints, UploadPipeline


def get_storage_adapter(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> StorageAdapter:
    """Reuse the S3 client held on ``app.state``; created on first use."""
    state = request.app.state
    s3_client = getattr(state, "s3_client", None)
    if s3_client is None:
        s3_client = create_s3_client(settings)
        state.s3_client = s3_client
    return StorageAdapter(s3_client, settings)


def get_upload_pipeline(
    storage: StorageAdapter = Depends(get_storage_adapter),
    settings: Settings = Depends(get_settings),
) -> UploadPipeline:
    return UploadPipeline(
        storage,
        ImageCompressor(quality=settings.image_quality),
        UploadConstraints.from_settings(settings),
    )


def get_category_service(session: AsyncSession = Depends(get_db_session)) -> CategoryService:
    return CategoryService(session)


def get_product_service(
    session: AsyncSession = Depends(get_db_session),
    pipeline: UploadPipeline = Depends(get_upload_pipeline),
) -> ProductService:
    return ProductService(session, pipeline)


def get_banner_service(
    session: AsyncSession = Depends(get_db_session),
    pipeline: UploadPipeline = Depends(get_upload_pipeline),
) -> BannerService:
    return BannerService(session, pipeline)


def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(session, settings)

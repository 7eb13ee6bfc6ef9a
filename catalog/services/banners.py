from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.constants import BANNER_IMAGE_NAMESPACE
from catalog.core.exceptions import EntityNotFoundError, FieldValidationError, ImageValidationError
from catalog.models import Banner, Category
from catalog.repositories import BannerRepository, CategoryRepository
from catalog.schemas import BannerFields, BannerRead, BannerUpdate, ImageAsset
from catalog.services.persistence import AssetPersistence
from catalog.services.upload import RawFile, UploadPipeline

logger = logging.getLogger(__name__)


class BannerService:
    def __init__(self, session: AsyncSession, pipeline: UploadPipeline):
        self.session = session
        self.pipeline = pipeline
        self.repo = BannerRepository(session)
        self.categories = CategoryRepository(session)
        self.persistence = AssetPersistence(session, pipeline)

    async def create_banner_with_asset(
        self,
        fields: BannerFields,
        file: RawFile | None,
    ) -> BannerRead:
        if file is None:
            raise ImageValidationError("a banner requires exactly one image")
        category = await self._require_category(fields.category_id)
        (asset,) = await self.pipeline.upload_images([file], namespace=BANNER_IMAGE_NAMESPACE)

        async def write() -> Banner:
            banner = Banner(
                title=fields.title,
                subtitle=fields.subtitle,
                description=fields.description,
                is_active=fields.is_active,
                image_url=asset.url,
                image_key=asset.storage_key,
                category_id=category.id,
            )
            banner.category = category
            return await self.repo.add(banner)

        banner = await self.persistence.persist_with_assets(write, [asset])
        logger.info("Banner created", extra={"banner_id": str(banner.id), "key": asset.storage_key})
        return BannerRead.model_validate(banner)

    async def update_banner(
        self,
        banner_id: UUID,
        update: BannerUpdate,
        file: RawFile | None = None,
    ) -> BannerRead:
        banner = await self._require(banner_id)
        update_data = update.model_dump(exclude_unset=True)
        if not update_data and file is None:
            raise FieldValidationError("body", "no changes provided")
        if update_data.get("category_id") is not None:
            await self._require_category(update_data["category_id"])

        if file is None:
            updated = await self.persistence.persist_with_assets(
                lambda: self.repo.update(banner, update_data), []
            )
            logger.info(
                "Banner updated",
                extra={"banner_id": str(banner_id), "fields": list(update_data)},
            )
            return BannerRead.model_validate(updated)

        old_asset = ImageAsset(url=banner.image_url, storage_key=banner.image_key)
        (new_asset,) = await self.pipeline.upload_images([file], namespace=BANNER_IMAGE_NAMESPACE)
        update_data["image_url"] = new_asset.url
        update_data["image_key"] = new_asset.storage_key

        updated = await self.persistence.replace_assets(
            lambda: self.repo.update(banner, update_data),
            [new_asset],
            [old_asset],
        )
        logger.info(
            "Banner image replaced",
            extra={"banner_id": str(banner_id), "key": new_asset.storage_key},
        )
        return BannerRead.model_validate(updated)

    async def get_banner(self, banner_id: UUID) -> BannerRead:
        return BannerRead.model_validate(await self._require(banner_id))

    async def list_banners(
        self,
        *,
        page: int,
        limit: int,
        search: str | None = None,
        category_id: UUID | None = None,
        is_active: bool | None = None,
    ) -> tuple[list[BannerRead], int]:
        banners, total = await self.repo.list_page(
            offset=(page - 1) * limit,
            limit=limit,
            search=search,
            category_id=category_id,
            is_active=is_active,
        )
        return [BannerRead.model_validate(banner) for banner in banners], total

    async def delete_banner(self, banner_id: UUID) -> None:
        banner = await self._require(banner_id)
        asset = ImageAsset(url=banner.image_url, storage_key=banner.image_key)

        await self.persistence.persist_with_assets(lambda: self.repo.delete(banner), [])
        await self.pipeline.release([asset])
        logger.info("Banner deleted", extra={"banner_id": str(banner_id)})

    async def _require(self, banner_id: UUID) -> Banner:
        banner = await self.repo.get(banner_id)
        if banner is None:
            raise EntityNotFoundError("Banner", banner_id)
        return banner

    async def _require_category(self, category_id: UUID) -> Category:
        category = await self.categories.get(category_id)
        if category is None:
            raise EntityNotFoundError("Category", category_id)
        return category

"""Product use cases: create/update with images, read, list and delete."""

from __future__ import annotations

import logging
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.constants import PRODUCT_IMAGE_NAMESPACE
from catalog.core.exceptions import EntityNotFoundError, FieldValidationError
from catalog.models import Category, Product
from catalog.repositories import CategoryRepository, ProductRepository
from catalog.schemas import ImageAsset, ProductFields, ProductRead, ProductUpdate
from catalog.services.persistence import AssetPersistence
from catalog.services.upload import RawFile, UploadPipeline

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, session: AsyncSession, pipeline: UploadPipeline):
        self.session = session
        self.pipeline = pipeline
        self.repo = ProductRepository(session)
        self.categories = CategoryRepository(session)
        self.persistence = AssetPersistence(session, pipeline)

    async def create_product_with_assets(
        self,
        fields: ProductFields,
        files: Sequence[RawFile],
    ) -> ProductRead:
        """Upload ``files`` and create the product that references them.

        The category is resolved before anything is uploaded; a missing one
        fails the request with no storage calls.
        """
        category = await self._require_category(fields.category_id)
        assets = await self.pipeline.upload_images(files, namespace=PRODUCT_IMAGE_NAMESPACE)

        async def write() -> Product:
            product = Product(
                title=fields.title,
                description=fields.description,
                price=fields.price,
                discounted_price=fields.discounted_price,
                is_available=fields.is_available,
                rating=fields.rating,
                images=[asset.to_record() for asset in assets],
                specifications=[spec.model_dump() for spec in fields.specifications],
                instructions=[item.model_dump() for item in fields.instructions],
                category_id=category.id,
            )
            product.category = category
            return await self.repo.add(product)

        product = await self.persistence.persist_with_assets(write, assets)
        logger.info(
            "Product created",
            extra={"product_id": str(product.id), "image_count": len(assets)},
        )
        return ProductRead.model_validate(product)

    async def update_product(
        self,
        product_id: UUID,
        update: ProductUpdate,
        files: Sequence[RawFile] = (),
    ) -> ProductRead:
        """Apply a partial update; new ``files`` replace the whole image list."""
        product = await self._require(product_id)
        update_data = self._dump_update(update)
        if not update_data and not files:
            raise FieldValidationError("body", "no changes provided")

        price = update_data.get("price", product.price)
        discounted = update_data.get("discounted_price", product.discounted_price)
        if discounted is not None and discounted > price:
            raise FieldValidationError("discountedPrice", "must not exceed price")
        if update_data.get("category_id") is not None:
            await self._require_category(update_data["category_id"])

        if not files:
            updated = await self.persistence.persist_with_assets(
                lambda: self.repo.update(product, update_data), []
            )
            logger.info(
                "Product updated",
                extra={"product_id": str(product_id), "fields": list(update_data)},
            )
            return ProductRead.model_validate(updated)

        old_assets = [ImageAsset.model_validate(image) for image in product.images or []]
        new_assets = await self.pipeline.upload_images(files, namespace=PRODUCT_IMAGE_NAMESPACE)
        update_data["images"] = [asset.to_record() for asset in new_assets]

        updated = await self.persistence.replace_assets(
            lambda: self.repo.update(product, update_data),
            new_assets,
            old_assets,
        )
        logger.info(
            "Product images replaced",
            extra={
                "product_id": str(product_id),
                "fields": list(update_data),
                "image_count": len(new_assets),
            },
        )
        return ProductRead.model_validate(updated)

    async def get_product(self, product_id: UUID) -> ProductRead:
        return ProductRead.model_validate(await self._require(product_id))

    async def list_products(
        self,
        *,
        page: int,
        limit: int,
        search: str | None = None,
        category_id: UUID | None = None,
        is_available: bool | None = None,
    ) -> tuple[list[ProductRead], int]:
        products, total = await self.repo.list_page(
            offset=(page - 1) * limit,
            limit=limit,
            search=search,
            category_id=category_id,
            is_available=is_available,
        )
        return [ProductRead.model_validate(product) for product in products], total

    async def delete_product(self, product_id: UUID) -> None:
        """Delete the record first, then its images (best-effort)."""
        product = await self._require(product_id)
        assets = [ImageAsset.model_validate(image) for image in product.images or []]

        await self.persistence.persist_with_assets(lambda: self.repo.delete(product), [])
        await self.pipeline.release(assets)
        logger.info(
            "Product deleted",
            extra={"product_id": str(product_id), "image_count": len(assets)},
        )

    async def _require(self, product_id: UUID) -> Product:
        product = await self.repo.get(product_id)
        if product is None:
            raise EntityNotFoundError("Product", product_id)
        return product

    async def _require_category(self, category_id: UUID) -> Category:
        category = await self.categories.get(category_id)
        if category is None:
            raise EntityNotFoundError("Category", category_id)
        return category

    @staticmethod
    def _dump_update(update: ProductUpdate) -> dict[str, Any]:
        data = update.model_dump(exclude_unset=True)
        if update.specifications is not None:
            data["specifications"] = [spec.model_dump() for spec in update.specifications]
        if update.instructions is not None:
            data["instructions"] = [item.model_dump() for item in update.instructions]
        return data

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.exceptions import EntityNotFoundError, FieldValidationError
from catalog.models import Category
from catalog.repositories import CategoryRepository
from catalog.schemas import CategoryCreate, CategoryRead, CategoryUpdate

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = CategoryRepository(session)

    async def create_category(self, payload: CategoryCreate) -> CategoryRead:
        await self._ensure_name_available(payload.name)
        category = await self.repo.add(Category(**payload.model_dump()))
        await self.session.commit()
        logger.info("Category created", extra={"category_id": str(category.id)})
        return CategoryRead.model_validate(category)

    async def list_categories(
        self,
        *,
        page: int,
        limit: int,
        search: str | None = None,
        is_active: bool | None = None,
    ) -> tuple[list[CategoryRead], int]:
        categories, total = await self.repo.list_page(
            offset=(page - 1) * limit,
            limit=limit,
            search=search,
            is_active=is_active,
        )
        return [CategoryRead.model_validate(category) for category in categories], total

    async def get_category(self, category_id: UUID) -> CategoryRead:
        return CategoryRead.model_validate(await self.require(category_id))

    async def update_category(self, category_id: UUID, payload: CategoryUpdate) -> CategoryRead:
        category = await self.require(category_id)
        update_data = payload.model_dump(exclude_unset=True)
        if not update_data:
            raise FieldValidationError("body", "no changes provided")
        if "name" in update_data and update_data["name"].lower() != category.name.lower():
            await self._ensure_name_available(update_data["name"])

        updated = await self.repo.update(category, update_data)
        await self.session.commit()
        logger.info(
            "Category updated",
            extra={"category_id": str(category_id), "fields": list(update_data)},
        )
        return CategoryRead.model_validate(updated)

    async def delete_category(self, category_id: UUID) -> None:
        # Referencing products/banners are not checked; their FK is set to NULL.
        category = await self.require(category_id)
        await self.repo.delete(category)
        await self.session.commit()
        logger.info("Category deleted", extra={"category_id": str(category_id)})

    async def require(self, category_id: UUID) -> Category:
        category = await self.repo.get(category_id)
        if category is None:
            raise EntityNotFoundError("Category", category_id)
        return category

    async def _ensure_name_available(self, name: str) -> None:
        if await self.repo.get_by_name(name) is not None:
            raise FieldValidationError("name", f"category '{name}' already exists")

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models import Category


class CategoryRepository:
    """Data access helper for categories."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, category_id: UUID) -> Category | None:
        result = await self.session.execute(select(Category).where(Category.id == category_id))
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Category | None:
        stmt = select(Category).where(func.lower(Category.name) == func.lower(name))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_page(
        self,
        *,
        offset: int,
        limit: int,
        search: str | None = None,
        is_active: bool | None = None,
    ) -> tuple[list[Category], int]:
        conditions = []
        if search:
            conditions.append(Category.name.ilike(f"%{search}%"))
        if is_active is not None:
            conditions.append(Category.is_active.is_(is_active))

        total = await self.session.scalar(select(func.count(Category.id)).where(*conditions))
        stmt = (
            select(Category)
            .where(*conditions)
            .order_by(Category.created_at.desc(), Category.name)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), int(total or 0)

    async def add(self, category: Category) -> Category:
        self.session.add(category)
        await self.session.flush()
        await self.session.refresh(category)
        return category

    async def update(self, category: Category, payload: dict[str, Any]) -> Category:
        for field, value in payload.items():
            setattr(category, field, value)
        await self.session.flush()
        await self.session.refresh(category)
        return category

    async def delete(self, category: Category) -> None:
        await self.session.delete(category)
        await self.session.flush()

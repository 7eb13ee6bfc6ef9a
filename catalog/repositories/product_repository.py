from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models import Product


class ProductRepository:
    """Data access helper for products."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, product_id: UUID) -> Product | None:
        result = await self.session.execute(select(Product).where(Product.id == product_id))
        return result.unique().scalar_one_or_none()

    async def list_page(
        self,
        *,
        offset: int,
        limit: int,
        search: str | None = None,
        category_id: UUID | None = None,
        is_available: bool | None = None,
    ) -> tuple[list[Product], int]:
        conditions = []
        if search:
            pattern = f"%{search}%"
            conditions.append(or_(Product.title.ilike(pattern), Product.description.ilike(pattern)))
        if category_id is not None:
            conditions.append(Product.category_id == category_id)
        if is_available is not None:
            conditions.append(Product.is_available.is_(is_available))

        total = await self.session.scalar(select(func.count(Product.id)).where(*conditions))
        stmt = (
            select(Product)
            .where(*conditions)
            .order_by(Product.created_at.desc(), Product.title)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.unique().scalars().all()), int(total or 0)

    async def add(self, product: Product) -> Product:
        self.session.add(product)
        await self.session.flush()
        await self.session.refresh(product)
        return product

    async def update(self, product: Product, payload: dict[str, Any]) -> Product:
        for field, value in payload.items():
            setattr(product, field, value)
        await self.session.flush()
        await self.session.refresh(product)
        return product

    async def delete(self, product: Product) -> None:
        await self.session.delete(product)
        await self.session.flush()

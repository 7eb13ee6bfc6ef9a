from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models import Banner


class BannerRepository:
    """Data access helper for banners."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, banner_id: UUID) -> Banner | None:
        result = await self.session.execute(select(Banner).where(Banner.id == banner_id))
        return result.unique().scalar_one_or_none()

    async def list_page(
        self,
        *,
        offset: int,
        limit: int,
        search: str | None = None,
        category_id: UUID | None = None,
        is_active: bool | None = None,
    ) -> tuple[list[Banner], int]:
        conditions = []
        if search:
            pattern = f"%{search}%"
            conditions.append(or_(Banner.title.ilike(pattern), Banner.subtitle.ilike(pattern)))
        if category_id is not None:
            conditions.append(Banner.category_id == category_id)
        if is_active is not None:
            conditions.append(Banner.is_active.is_(is_active))

        total = await self.session.scalar(select(func.count(Banner.id)).where(*conditions))
        stmt = (
            select(Banner)
            .where(*conditions)
            .order_by(Banner.created_at.desc(), Banner.title)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.unique().scalars().all()), int(total or 0)

    async def add(self, banner: Banner) -> Banner:
        self.session.add(banner)
        await self.session.flush()
        await self.session.refresh(banner)
        return banner

    async def update(self, banner: Banner, payload: dict[str, Any]) -> Banner:
        for field, value in payload.items():
            setattr(banner, field, value)
        await self.session.flush()
        await self.session.refresh(banner)
        return banner

    async def delete(self, banner: Banner) -> None:
        await self.session.delete(banner)
        await self.session.flush()

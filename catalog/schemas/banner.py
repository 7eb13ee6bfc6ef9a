from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from catalog.schemas.assets import ImageAsset
from catalog.schemas.category import CategorySummary
from catalog.schemas.common import CamelModel


class BannerFields(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    subtitle: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    is_active: bool = True
    category_id: UUID


class BannerUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    subtitle: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    is_active: Optional[bool] = None
    category_id: Optional[UUID] = None


class BannerRead(CamelModel):
    id: UUID
    title: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    image: ImageAsset
    is_active: bool
    category: Optional[CategorySummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

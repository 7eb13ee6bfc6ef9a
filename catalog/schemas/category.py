from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from catalog.schemas.common import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = None
    image_url: Optional[str] = Field(default=None, max_length=512)
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("name must not be empty")
        return trimmed


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    description: Optional[str] = None
    image_url: Optional[str] = Field(default=None, max_length=512)
    is_active: Optional[bool] = None


class CategoryRead(CamelModel):
    id: UUID
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CategorySummary(CamelModel):
    id: UUID
    name: str

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from catalog.schemas.assets import ImageAsset
from catalog.schemas.category import CategorySummary
from catalog.schemas.common import CamelModel


class Specification(CamelModel):
    title: str = Field(..., min_length=1, max_length=120)
    options: list[str] = Field(default_factory=list)

    @field_validator("options")
    @classmethod
    def _unique_options(cls, value: list[str]) -> list[str]:
        # options is a set; keep first-seen order for stable output
        seen: dict[str, None] = {}
        for option in value:
            trimmed = option.strip()
            if trimmed:
                seen.setdefault(trimmed, None)
        return list(seen)


class Instruction(CamelModel):
    title: str = Field(..., min_length=1, max_length=120)
    value: list[str] = Field(default_factory=list)


class ProductFields(CamelModel):
    """Validated non-file fields of a product create request."""

    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: float = Field(..., ge=0)
    discounted_price: Optional[float] = Field(default=None, ge=0)
    is_available: bool = True
    rating: float = Field(default=0.0, ge=0, le=5)
    category_id: UUID
    specifications: list[Specification] = Field(default_factory=list)
    instructions: list[Instruction] = Field(default_factory=list)

    @model_validator(mode="after")
    def _discount_not_above_price(self) -> "ProductFields":
        if self.discounted_price is not None and self.discounted_price > self.price:
            raise ValueError("discountedPrice must not exceed price")
        return self


class ProductUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    discounted_price: Optional[float] = Field(default=None, ge=0)
    is_available: Optional[bool] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    category_id: Optional[UUID] = None
    specifications: Optional[list[Specification]] = None
    instructions: Optional[list[Instruction]] = None


class ProductRead(CamelModel):
    id: UUID
    title: str
    description: Optional[str] = None
    price: float
    discounted_price: Optional[float] = None
    is_available: bool
    rating: float
    images: list[ImageAsset]
    category: Optional[CategorySummary] = None
    specifications: list[Specification]
    instructions: list[Instruction]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

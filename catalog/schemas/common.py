"""Common response schemas for the uniform API envelope."""

from __future__ import annotations

import math
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python; both accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[DataT]):
    success: bool = Field(default=True)
    message: str
    data: Optional[DataT] = None


class PaginatedResponse(BaseModel, Generic[DataT]):
    success: bool = Field(default=True)
    message: str
    data: list[DataT]
    pagination: dict[str, int]


class ErrorResponse(BaseModel):
    success: bool = Field(default=False)
    message: str
    error: str
    code: str
    field: Optional[str] = None


def build_pagination(*, page: int, limit: int, total: int, label: str) -> dict[str, int]:
    """Return ``{currentPage, totalPages, total<Label>}``."""
    return {
        "currentPage": page,
        "totalPages": math.ceil(total / limit) if total else 0,
        f"total{label}": total,
    }

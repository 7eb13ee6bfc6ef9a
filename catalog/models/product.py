from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database.base import Base
from catalog.models.category import Category


class Product(Base):
    """Catalog product.

    ``images`` keeps the ordered ``[{"url", "storage_key"}]`` list written by the
    upload pipeline; ``specifications`` and ``instructions`` hold the parsed
    structured form fields.
    """

    __tablename__ = "products"

    id: Mapped[UUID] = mapped_column(default=uuid4, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    discounted_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    images: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    specifications: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    instructions: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    # Category deletion is unguarded; products keep a null reference.
    category_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    category: Mapped[Category | None] = relationship(lazy="joined")

"""Catalog API endpoint modules."""

from . import auth, banners, categories, health, products  # noqa: F401

__all__ = ["auth", "banners", "categories", "health", "products"]

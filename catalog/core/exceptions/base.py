"""Base exception for the Catalog service."""

from __future__ import annotations


class CatalogError(Exception):
    """Catalog 서비스 기본 예외."""

    def __init__(self, message: str = "Catalog error occurred") -> None:
        self.message = message
        super().__init__(message)

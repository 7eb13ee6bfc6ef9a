"""Image upload pipeline errors."""

from __future__ import annotations

from catalog.core.exceptions.base import CatalogError


class ImageValidationError(CatalogError):
    """A file in the batch violates a type, size or count constraint.

    Raised before any compression or upload starts.
    """

    def __init__(self, reason: str, filename: str | None = None) -> None:
        self.filename = filename
        self.reason = reason
        message = f"{filename}: {reason}" if filename else reason
        super().__init__(message)


class CompressionError(CatalogError):
    def __init__(self, filename: str | None, reason: str) -> None:
        self.filename = filename
        super().__init__(f"Could not compress {filename or 'image'}: {reason}")


class StorageError(CatalogError):
    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        super().__init__(f"Storage operation failed for {key}: {reason}")


class UploadError(CatalogError):
    """The batch failed after validation; prior uploads were rolled back."""

    def __init__(self, filename: str | None, cause: Exception) -> None:
        self.filename = filename
        self.cause = cause
        super().__init__(f"Upload failed for {filename or 'image'}: {cause}")

"""Core Exceptions."""

from catalog.core.exceptions.auth import (
    AdminRegistrationDisabledError,
    EmailAlreadyRegisteredError,
    ForbiddenRoleError,
    InvalidCredentialsError,
    InvalidPasswordError,
    InvalidTokenError,
    MissingTokenError,
)
from catalog.core.exceptions.base import CatalogError
from catalog.core.exceptions.catalog import EntityNotFoundError, FieldValidationError
from catalog.core.exceptions.upload import (
    CompressionError,
    ImageValidationError,
    StorageError,
    UploadError,
)

__all__ = [
    "AdminRegistrationDisabledError",
    "CatalogError",
    "CompressionError",
    "EmailAlreadyRegisteredError",
    "EntityNotFoundError",
    "FieldValidationError",
    "ForbiddenRoleError",
    "ImageValidationError",
    "InvalidCredentialsError",
    "InvalidPasswordError",
    "InvalidTokenError",
    "MissingTokenError",
    "StorageError",
    "UploadError",
]

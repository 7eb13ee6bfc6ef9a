"""Catalog entity errors."""

from __future__ import annotations

from catalog.core.exceptions.base import CatalogError


class EntityNotFoundError(CatalogError):
    def __init__(self, entity: str, entity_id: object | None = None) -> None:
        self.entity = entity
        self.entity_id = entity_id
        if entity_id is not None:
            message = f"{entity} not found: {entity_id}"
        else:
            message = f"{entity} not found"
        super().__init__(message)


class FieldValidationError(CatalogError):
    """A structured form field failed to parse or validate."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")

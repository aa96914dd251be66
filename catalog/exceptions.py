"""Catalog exceptions.

Every error raised by the catalog core derives from ``CatalogError`` and
carries a stable ``code`` plus a ``details`` dict for callers that need to
map errors onto their own transport.
"""

from typing import Any


class CatalogError(Exception):
    """Base exception for all catalog errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "CATALOG_ERROR"
        self.details = details or {}


class ValidationError(CatalogError):
    """Raised when a required field is missing or a key field is mutated."""

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field": field, "value": str(value) if value is not None else None},
        )
        self.field = field


class NotFoundError(CatalogError):
    """Raised when a category (or a product within one) does not exist."""

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(
            message=f"{entity_type} with id '{entity_id}' not found",
            code="NOT_FOUND",
            details={"entity_type": entity_type, "entity_id": str(entity_id)},
        )


class InvalidOperationError(CatalogError):
    """Raised when an operation is not allowed in the aggregate's current state."""

    def __init__(self, message: str, current_state: str | None = None):
        super().__init__(
            message=message,
            code="INVALID_OPERATION",
            details={"current_state": current_state} if current_state else {},
        )


class PersistenceError(CatalogError):
    """Raised when storage rejects a persist; the whole unit has been rolled back."""

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(message=message, code=code or "PERSISTENCE_ERROR", details=details)


class ConcurrencyError(PersistenceError):
    """Raised when another writer changed the category since it was loaded."""

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(
            message=f"{entity_type} '{entity_id}' was modified by another writer",
            code="CONCURRENCY_ERROR",
            details={"entity_type": entity_type, "entity_id": str(entity_id)},
        )

"""Mixins for SQLAlchemy models."""

from sqlalchemy import Boolean, Column, DateTime, func


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class SoftDeleteMixin:
    """Mixin to add a soft delete flag.

    The flag has no column default: callers must state it when creating a row.
    """

    is_deleted = Column(Boolean, nullable=False)

    def soft_delete(self) -> None:
        """Soft delete the record."""
        self.is_deleted = True

    def restore(self) -> None:
        """Restore a soft-deleted record."""
        self.is_deleted = False

"""Category model."""

from sqlalchemy import Boolean, Column, Integer, String, Text
from sqlalchemy.orm import relationship

from catalog.database import Base
from catalog.models.mixins import SoftDeleteMixin, TimestampMixin

# Fields a caller must always state explicitly when creating a category.
REQUIRED_FIELDS = ("name", "is_active", "is_deleted", "is_features")


class Category(Base, TimestampMixin, SoftDeleteMixin):
    """Category aggregate root owning its products."""

    __tablename__ = "category"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False)
    is_features = Column(Boolean, nullable=False)
    images = Column(String, nullable=True)  # opaque URL or storage path
    version_id = Column(Integer, nullable=False)

    # Relationships
    # Detached products are deleted on flush; the collection loads with its category
    products = relationship(
        "Product",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Product.id",
    )

    __mapper_args__ = {"version_id_col": version_id}

    @property
    def is_visible(self) -> bool:
        """Whether the category shows up in normal catalog browsing."""
        return not self.is_deleted and bool(self.is_active)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"

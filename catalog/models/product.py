"""Product model."""

from sqlalchemy import Column, ForeignKey, Integer, String

from catalog.database import Base
from catalog.models.mixins import TimestampMixin


class Product(Base, TimestampMixin):
    """Product owned by exactly one category.

    Has no relationship back to ``Category``. Attaching and detaching happen
    only through ``Category.products``; ``category_id`` is filled in by the
    ORM at flush time.
    """

    __tablename__ = "product"

    id = Column(Integer, primary_key=True, index=True)
    category_id = Column(Integer, ForeignKey("category.id"), nullable=False, index=True)
    name = Column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, category_id={self.category_id})>"

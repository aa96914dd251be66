"""Category service: the only mutation surface of the category aggregate."""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from catalog.exceptions import (
    ConcurrencyError,
    InvalidOperationError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from catalog.models.category import REQUIRED_FIELDS, Category
from catalog.models.product import Product
from catalog.schemas.category import CategoryCreate, CategoryUpdate, ProductCreate

logger = logging.getLogger(__name__)


def _to_validation_error(exc: PydanticValidationError) -> ValidationError:
    """Convert the first pydantic error into a catalog ValidationError."""
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or None
    return ValidationError(f"Invalid value for '{field}': {error['msg']}", field=field)


class CategoryService:
    """Service for the category aggregate and the products it owns.

    Mutating methods only change the in-memory aggregate; ``persist`` writes
    the category together with every add, update and removal of its products
    in one transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        name: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
        is_deleted: bool | None = None,
        is_features: bool | None = None,
        images: str | None = None,
        products: list[Product | dict[str, Any]] | None = None,
    ) -> Category:
        """Build a new, unsaved category. No id is assigned until ``persist``."""
        try:
            data = CategoryCreate(
                name=name,
                description=description,
                is_active=is_active,
                is_deleted=is_deleted,
                is_features=is_features,
                images=images,
            )
        except PydanticValidationError as e:
            raise _to_validation_error(e) from e

        category = Category(**data.model_dump())
        for item in products or []:
            category.products.append(self._build_product(item))
        return category

    def read(self, category_id: int, for_update: bool = False) -> Category:
        """Load a category with all of its products.

        With ``for_update`` the category row is locked until the transaction
        ends, on backends that support ``SELECT ... FOR UPDATE``.
        """
        query = self.db.query(Category).filter(Category.id == category_id)
        if for_update:
            query = query.with_for_update().populate_existing()

        category = query.first()
        if not category:
            raise NotFoundError("Category", category_id)
        return category

    def list_visible(self, featured: bool | None = None) -> list[Category]:
        """Categories shown in normal browsing: active and not soft-deleted."""
        query = self.db.query(Category).filter(
            Category.is_deleted.is_(False),
            Category.is_active.is_(True),
        )
        if featured is not None:
            query = query.filter(Category.is_features.is_(featured))
        return query.order_by(Category.name, Category.id).all()

    def add_product(self, category: Category, name: str | None = None) -> Product:
        """Create a product inside ``category``. It is inserted on the next persist."""
        self._ensure_products_mutable(category)
        product = self._build_product({"name": name})
        category.products.append(product)
        return product

    def remove_product(self, category: Category, product: Product) -> None:
        """Detach ``product``; its row is deleted on the next persist."""
        self._ensure_products_mutable(category)
        if product not in category.products:
            raise NotFoundError("Product", product.id)

        category.products.remove(product)
        logger.info("Detached product %s from category %s", product.id, category.id)

    def update_details(self, category: Category, **changes: Any) -> Category:
        """Replace scalar fields of a category. Takes effect on the next persist."""
        try:
            data = CategoryUpdate(**changes)
        except PydanticValidationError as e:
            raise _to_validation_error(e) from e

        updates = data.model_dump(exclude_unset=True)
        for field, value in updates.items():
            if value is None and field in REQUIRED_FIELDS:
                raise ValidationError(f"Category field '{field}' is required", field=field)

        for field, value in updates.items():
            setattr(category, field, value)
        return category

    def soft_delete(self, category: Category) -> Category:
        """Hide a category from browsing. Takes effect on the next persist."""
        category.soft_delete()
        return category

    def restore(self, category: Category) -> Category:
        """Undo a soft delete. Takes effect on the next persist."""
        category.restore()
        return category

    def persist(self, category: Category) -> Category:
        """Insert or update the category and all of its products atomically."""
        state = inspect(category)
        if state.detached:
            # Loaded in a session that has since closed
            self.db.add(category)
        self._validate(category)

        name = category.name
        product_count = len(category.products)
        existing_id = state.identity[0] if state.identity else None

        if state.has_identity:
            # Bump the version even when only the product collection changed
            category.updated_at = func.now()

        try:
            self.db.add(category)
            self.db.flush()
            category_id = category.id
            self.db.commit()
        except StaleDataError as e:
            self.db.rollback()
            logger.warning("Concurrent modification of category %s, rolled back", existing_id)
            raise ConcurrencyError("Category", existing_id) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning("Failed to persist category %r, rolled back: %s", name, e)
            raise PersistenceError(f"Failed to persist category '{name}': {e}") from e

        logger.info("Persisted category %s with %d products", category_id, product_count)
        return category

    def delete(self, category: Category) -> None:
        """Delete a category row together with all of its products."""
        state = inspect(category)
        if state.detached:
            self.db.add(category)
        if not state.persistent:
            raise InvalidOperationError("Category has not been persisted", current_state="new")

        category_id = state.identity[0]
        product_count = len(category.products)
        try:
            self.db.delete(category)
            self.db.commit()
        except StaleDataError as e:
            self.db.rollback()
            logger.warning(
                "Concurrent modification of category %s, delete rolled back", category_id
            )
            raise ConcurrencyError("Category", category_id) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning("Failed to delete category %s, rolled back: %s", category_id, e)
            raise PersistenceError(f"Failed to delete category {category_id}: {e}") from e

        logger.info("Deleted category %s and %d products", category_id, product_count)

    def _build_product(self, item: Product | dict[str, Any]) -> Product:
        if isinstance(item, Product):
            if not inspect(item).transient or item.category_id is not None:
                raise ValidationError(
                    "Only new, unattached products can be added to a category",
                    field="products",
                )
            return item

        try:
            data = ProductCreate(**item)
        except PydanticValidationError as e:
            raise _to_validation_error(e) from e
        return Product(**data.model_dump())

    def _ensure_products_mutable(self, category: Category) -> None:
        if category.is_deleted:
            raise InvalidOperationError(
                f"Category '{category.name}' is soft-deleted; its products cannot be changed",
                current_state="deleted",
            )

    def _validate(self, category: Category) -> None:
        """Reject the aggregate before any write if it breaks a field rule."""
        for field in REQUIRED_FIELDS:
            if getattr(category, field) is None:
                raise ValidationError(f"Category field '{field}' is required", field=field)

        state = inspect(category)
        if state.persistent and state.attrs.id.history.has_changes():
            raise ValidationError("Category id cannot be changed", field="id")

        for product in category.products:
            product_state = inspect(product)
            if product_state.persistent:
                for key in ("id", "category_id"):
                    if product_state.attrs[key].history.has_changes():
                        raise ValidationError(f"Product {key} cannot be changed", field=key)
                if product.category_id != category.id:
                    raise ValidationError(
                        f"Product {product.id} belongs to another category",
                        field="category_id",
                        value=product.category_id,
                    )
            elif product.category_id is not None and product.category_id != category.id:
                raise ValidationError(
                    "Product category_id is assigned from the owning category",
                    field="category_id",
                    value=product.category_id,
                )

"""Model and schema tests."""

from catalog.models import Category, Product
from catalog.schemas import CategoryResponse


def test_soft_delete_and_restore_flip_flag():
    """Test the soft delete mixin on a category."""
    category = Category(name="Caps", is_active=True, is_deleted=False, is_features=False)

    category.soft_delete()
    assert category.is_deleted is True
    assert category.is_visible is False

    category.restore()
    assert category.is_deleted is False
    assert category.is_visible is True


def test_deleted_category_is_never_visible():
    """Test that visibility ignores the other flags once soft-deleted."""
    category = Category(name="Gone", is_active=True, is_deleted=True, is_features=True)
    assert category.is_visible is False


def test_products_have_no_link_back_to_category():
    """Test that a product cannot reach or detach from its category by itself."""
    assert "products" in Category.__mapper__.relationships
    assert len(Product.__mapper__.relationships) == 0


def test_product_foreign_key_is_required():
    """Test the storage-level shape of the product table."""
    column = Product.__table__.c.category_id
    assert column.nullable is False
    assert [fk.target_fullname for fk in column.foreign_keys] == ["category.id"]
    assert all(fk.ondelete is None for fk in column.foreign_keys)


def test_category_response_includes_products(service, shoes):
    """Test serializing a persisted category with its products."""
    service.add_product(shoes, name="Derby")
    service.persist(shoes)

    data = CategoryResponse.model_validate(service.read(shoes.id))

    assert data.name == "Shoes"
    assert data.is_deleted is False
    assert [p.name for p in data.products] == ["Derby"]
    assert data.products[0].category_id == data.id

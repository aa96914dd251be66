"""Category and product schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    """Create a product inside a category."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, max_length=255)


class ProductResponse(BaseModel):
    """Product response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    category_id: int
    name: str | None


class CategoryCreate(BaseModel):
    """Create a new category. Every flag must be given explicitly."""

    name: str = Field(..., max_length=255)
    description: str | None = None
    is_active: bool
    is_deleted: bool
    is_features: bool
    images: str | None = None


class CategoryUpdate(BaseModel):
    """Update category details. Keys and the soft delete flag are not editable here."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, max_length=255)
    description: str | None = None
    is_active: bool | None = None
    is_features: bool | None = None
    images: str | None = None


class CategoryResponse(BaseModel):
    """Category response with its products."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    is_active: bool
    is_deleted: bool
    is_features: bool
    images: str | None
    products: list[ProductResponse]
    created_at: datetime
    updated_at: datetime

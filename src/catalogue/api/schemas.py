"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from catalogue.category.category import Category
from catalogue.category.management import CreateCategory
from catalogue.product.management import CreateProduct, UpdateProduct
from catalogue.product.product import (
    SEO,
    Dimensions,
    Image,
    Product,
    Variant,
    discount_percentage,
    in_stock,
    main_image,
)

# --- Product Request Schemas ---


class CreateProductRequest(CreateProduct):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Wireless Mouse",
                    "description": "Ergonomic 2.4 GHz wireless mouse with silent clicks.",
                    "price": 24.99,
                    "compare_price": 34.99,
                    "sku": "elec-mse-001",
                    "quantity": 150,
                    "category_id": "65a1f0c2e4b0a1b2c3d4e5f6",
                    "images": [{"url": "https://cdn.example.com/mouse.jpg", "alt": "Wireless Mouse"}],
                    "tags": ["mouse", "wireless"],
                    "featured": True,
                }
            ]
        }
    }


class UpdateProductRequest(UpdateProduct):
    model_config = {"json_schema_extra": {"examples": [{"price": 19.99, "quantity": 90, "featured": False}]}}


# --- Category Request Schemas ---


class CreateCategoryRequest(CreateCategory):
    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Electronics", "description": "Electronic devices and accessories", "sort_order": 1}]
        }
    }


# --- Response Schemas ---


class CategorySummary(BaseModel):
    id: str
    name: str
    slug: str


class ProductResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str
    short_description: str | None = None
    price: float
    compare_price: float | None = None
    sku: str
    barcode: str | None = None
    track_quantity: bool
    quantity: int
    weight: float | None = None
    dimensions: Dimensions | None = None
    category_id: str
    category: CategorySummary | None = None
    images: list[Image] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    variants: list[Variant] = Field(default_factory=list)
    seo: SEO | None = None
    status: str
    featured: bool
    requires_shipping: bool
    taxable: bool
    in_stock: bool
    main_image: Image | None = None
    discount_percentage: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_product(cls, product: Product, category: dict | None = None) -> ProductResponse:
        """Public view of a product. Cost price stays internal."""
        return cls(
            **product.model_dump(exclude={"cost"}),
            category=category,
            in_stock=in_stock(product),
            main_image=main_image(product),
            discount_percentage=discount_percentage(product),
        )


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    pagination: Pagination


class ProductsResponse(BaseModel):
    products: list[ProductResponse]


class ProductDetailResponse(BaseModel):
    message: str | None = None
    product: ProductResponse


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    parent_id: str | None = None
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_category(cls, category: Category) -> CategoryResponse:
        return cls(**category.model_dump())


class CategoryListResponse(BaseModel):
    categories: list[CategoryResponse]


class CategoryDetailResponse(BaseModel):
    message: str | None = None
    category: CategoryResponse


class MessageResponse(BaseModel):
    message: str

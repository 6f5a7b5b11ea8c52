"""Product aggregate root with Variant, Image and SEO value objects.

Derived values (``in_stock``, ``main_image``, ``discount_percentage``) are
plain functions over a product and are never stored.
"""

import math
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from catalogue.shared.sku import normalize_sku
from catalogue.shared.slug import slugify
from shared.database import new_id
from shared.exceptions import ValidationError
from shared.model import Aggregate, utc_now


class ProductStatus(Enum):
    """Enumeration of product statuses."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"


class Image(BaseModel):
    """Product image."""

    url: str = Field(min_length=1)
    alt: str | None = None
    is_main: bool = False


class Variant(BaseModel):
    """A purchasable option of a product, e.g. "Size" with options S, M, L."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1)
    options: list[str] = Field(default_factory=list)
    price: float | None = Field(default=None, ge=0)
    sku: str | None = None
    quantity: int = Field(default=0, ge=0)

    @field_validator("sku")
    @classmethod
    def _normalize_sku(cls, value):
        return normalize_sku(value) if value else None


class Dimensions(BaseModel):
    """Value object for physical dimensions."""

    length: float | None = Field(default=None, ge=0)
    width: float | None = Field(default=None, ge=0)
    height: float | None = Field(default=None, ge=0)


class SEO(BaseModel):
    """Value object for SEO metadata."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, max_length=60)
    description: str | None = Field(default=None, max_length=160)
    keywords: list[str] = Field(default_factory=list)


class Product(Aggregate):
    """Product aggregate root."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=200)
    slug: str | None = None
    description: str = Field(min_length=1, max_length=2000)
    short_description: str | None = Field(default=None, max_length=500)
    price: float = Field(ge=0)
    compare_price: float | None = Field(default=None, ge=0)
    cost: float | None = Field(default=None, ge=0)
    sku: str
    barcode: str | None = None
    track_quantity: bool = True
    quantity: int = Field(default=0, ge=0)
    weight: float | None = Field(default=None, ge=0)
    dimensions: Dimensions | None = None
    category_id: str
    images: list[Image] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    variants: list[Variant] = Field(default_factory=list)
    seo: SEO | None = None
    status: ProductStatus = ProductStatus.ACTIVE
    featured: bool = False
    requires_shipping: bool = True
    taxable: bool = True
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("sku")
    @classmethod
    def _normalize_sku(cls, value):
        return normalize_sku(value)

    @field_validator("tags")
    @classmethod
    def _strip_tags(cls, value):
        return [tag.strip() for tag in value if tag and tag.strip()]

    @model_validator(mode="after")
    def _derive_slug_and_main_image(self):
        self.slug = slugify(self.slug or self.name)
        if not self.slug:
            raise ValueError("Slug must contain at least one letter or digit")

        self.images = normalize_main_image(self.images)
        return self

    @classmethod
    def create(cls, **data):
        now = utc_now()
        return cls(**{**data, "created_at": now, "updated_at": now})

    def update(self, **changes):
        """Apply a partial update and re-run every field rule.

        The slug is kept unless a new one is supplied, so renaming a product
        does not break existing links.
        """
        for protected in ("id", "created_at"):
            changes.pop(protected, None)

        data = self.model_dump()
        data.update(changes)
        data["updated_at"] = utc_now()
        updated = type(self).model_validate(data)

        for name in type(self).model_fields:
            setattr(self, name, getattr(updated, name))

    def find_variant(self, variant_id):
        return next((v for v in self.variants if v.id == str(variant_id)), None)

    def unit_price(self, variant_id=None):
        """Current price of the product, or of one of its variants when given."""
        if variant_id is None:
            return self.price

        variant = self.find_variant(variant_id)
        if variant is None:
            raise ValidationError({"variant_id": ["Variant not found"]})
        return variant.price if variant.price is not None else self.price

    def sku_for(self, variant_id=None):
        variant = self.find_variant(variant_id) if variant_id is not None else None
        return variant.sku if variant is not None and variant.sku else self.sku

    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE.value


def normalize_main_image(images):
    """Leave exactly one image flagged as main whenever images exist.

    Several flagged: only the first image keeps the flag.
    None flagged: the first image gets it.
    """
    flagged = [image for image in images if image.is_main]
    if len(flagged) > 1:
        for index, image in enumerate(images):
            image.is_main = index == 0
    elif not flagged and images:
        images[0].is_main = True
    return images


def in_stock(product: Product) -> bool:
    """Untracked products are always in stock."""
    if not product.track_quantity:
        return True
    return product.quantity > 0


def has_stock_for(product: Product, quantity: int, variant_id=None) -> bool:
    """A chosen variant is checked against its own stock, not the product's."""
    if not product.track_quantity:
        return True
    if variant_id is not None:
        variant = product.find_variant(variant_id)
        if variant is None:
            raise ValidationError({"variant_id": ["Variant not found"]})
        return variant.quantity >= quantity
    return product.quantity >= quantity


def main_image(product: Product) -> Image | None:
    return next((image for image in product.images if image.is_main), None) or (
        product.images[0] if product.images else None
    )


def discount_percentage(product: Product) -> int:
    """Percentage saved against the compare price, rounded half up; 0 without a discount."""
    if not product.compare_price or product.compare_price <= product.price:
        return 0
    return math.floor((product.compare_price - product.price) / product.compare_price * 100 + 0.5)

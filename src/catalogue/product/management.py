"""Product management: commands and handler for the admin catalogue operations."""

from pydantic import BaseModel, Field

from catalogue.category.repository import CategoryRepository
from catalogue.product.product import SEO, Dimensions, Image, Product, ProductStatus, Variant
from catalogue.product.repository import ProductRepository
from shared.exceptions import ConflictError, ValidationError
from shared.logging import get_logger

logger = get_logger(__name__)


class CreateProduct(BaseModel):
    name: str = Field(..., max_length=200)
    slug: str | None = None
    description: str = Field(..., max_length=2000)
    short_description: str | None = Field(None, max_length=500)
    price: float = Field(..., ge=0)
    compare_price: float | None = Field(None, ge=0)
    cost: float | None = Field(None, ge=0)
    sku: str
    barcode: str | None = None
    track_quantity: bool = True
    quantity: int = Field(0, ge=0)
    weight: float | None = Field(None, ge=0)
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


class UpdateProduct(BaseModel):
    """Partial update; only the fields that were sent are applied."""

    name: str | None = Field(None, max_length=200)
    slug: str | None = None
    description: str | None = Field(None, max_length=2000)
    short_description: str | None = Field(None, max_length=500)
    price: float | None = Field(None, ge=0)
    compare_price: float | None = Field(None, ge=0)
    cost: float | None = Field(None, ge=0)
    sku: str | None = None
    barcode: str | None = None
    track_quantity: bool | None = None
    quantity: int | None = Field(None, ge=0)
    weight: float | None = Field(None, ge=0)
    dimensions: Dimensions | None = None
    category_id: str | None = None
    images: list[Image] | None = None
    tags: list[str] | None = None
    variants: list[Variant] | None = None
    seo: SEO | None = None
    status: ProductStatus | None = None
    featured: bool | None = None
    requires_shipping: bool | None = None
    taxable: bool | None = None


class ManageProductHandler:
    def __init__(self, database):
        self.products = ProductRepository(database)
        self.categories = CategoryRepository(database)

    def create_product(self, command: CreateProduct) -> Product:
        self._assert_category_exists(command.category_id)

        product = Product.create(**command.model_dump())
        self._assert_unique(product)

        self.products.add(product)
        logger.info("Product created", product_id=product.id, sku=product.sku)
        return product

    def update_product(self, product_id, command: UpdateProduct) -> Product:
        product = self.products.get(product_id)

        changes = command.model_dump(exclude_unset=True)
        # Required fields cannot be cleared
        for field in ("name", "description", "price", "sku", "category_id", "status"):
            if field in changes and changes[field] is None:
                raise ValidationError({field: [f"{field} cannot be empty"]})

        if "category_id" in changes:
            self._assert_category_exists(changes["category_id"])

        product.update(**changes)
        self._assert_unique(product)

        self.products.add(product)
        logger.info("Product updated", product_id=product.id, fields=sorted(changes))
        return product

    def delete_product(self, product_id) -> None:
        product = self.products.get(product_id)
        self.products.remove(product)
        logger.info("Product deleted", product_id=product.id, sku=product.sku)

    def _assert_category_exists(self, category_id):
        if self.categories.find(category_id) is None:
            raise ValidationError({"category_id": ["Invalid category"]})

    def _assert_unique(self, product):
        if self.products.sku_taken(product.sku, exclude_id=product.id):
            raise ConflictError({"sku": ["Product with this SKU already exists"]})
        if self.products.slug_taken(product.slug, exclude_id=product.id):
            raise ConflictError({"slug": ["Product with this slug already exists"]})

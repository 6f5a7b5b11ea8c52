"""Catalogue browsing: listing, lookup, featured and related products.

Only administrators can see products that are not active. Everyone else is
served ``status=active`` whatever status they ask for.
"""

from typing import Literal

from pydantic import BaseModel, Field

from catalogue.product.product import Product, ProductStatus
from catalogue.product.repository import ProductRepository, build_listing_query
from shared.exceptions import ObjectNotFoundError


class ListProducts(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1, le=100)
    category: str | None = None
    min_price: float | None = Field(None, ge=0)
    max_price: float | None = Field(None, ge=0)
    search: str | None = None
    featured: bool | None = None
    status: ProductStatus | None = None
    sort: Literal["createdAt", "updatedAt", "price", "name"] = "createdAt"
    order: Literal["asc", "desc"] = "desc"


def visible_status(requested, is_admin) -> str:
    """Status a caller is allowed to list."""
    if is_admin and requested is not None:
        return ProductStatus(requested).value
    return ProductStatus.ACTIVE.value


class BrowseProductsHandler:
    def __init__(self, database):
        self.products = ProductRepository(database)

    def list_products(self, query: ListProducts, is_admin=False):
        filters = build_listing_query(
            category=query.category,
            min_price=query.min_price,
            max_price=query.max_price,
            search=query.search,
            featured=query.featured,
            status=visible_status(query.status, is_admin),
        )
        return self.products.list(
            filters,
            sort=query.sort,
            order=query.order,
            page=query.page,
            limit=query.limit,
        )

    def get_product(self, identifier, is_admin=False) -> Product:
        product = self.products.by_identifier(identifier)
        if product is None:
            raise ObjectNotFoundError({"_entity": ["Product not found"]})
        if not is_admin and not product.is_active():
            raise ObjectNotFoundError({"_entity": ["Product not available"]})
        return product

    def featured_products(self, limit=10):
        return self.products.featured(limit=limit)

    def related_products(self, product_id, limit=6, is_admin=False):
        product = self.products.get(product_id)
        if not is_admin and not product.is_active():
            raise ObjectNotFoundError({"_entity": ["Product not available"]})
        return self.products.related(product, limit=limit)

"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter, Depends, Query

from catalogue.api.schemas import (
    CategoryDetailResponse,
    CategoryListResponse,
    CategoryResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    MessageResponse,
    ProductDetailResponse,
    ProductListResponse,
    ProductResponse,
    ProductsResponse,
    UpdateProductRequest,
)
from catalogue.category.management import ManageCategoryHandler
from catalogue.category.repository import CategoryRepository
from catalogue.product.browsing import BrowseProductsHandler, ListProducts
from catalogue.product.management import ManageProductHandler
from catalogue.product.product import ProductStatus
from identity.api.dependencies import get_optional_user, require_admin
from shared.database import get_database
from shared.exceptions import ObjectNotFoundError

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


def _with_categories(database, products):
    categories = CategoryRepository(database).summaries(p.category_id for p in products)
    return [ProductResponse.from_product(p, categories.get(p.category_id)) for p in products]


def _with_category(database, product):
    return _with_categories(database, [product])[0]


# --- Product endpoints ---


@product_router.get("", response_model=ProductListResponse)
def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    category: str | None = None,
    min_price: float | None = Query(None, alias="minPrice", ge=0),
    max_price: float | None = Query(None, alias="maxPrice", ge=0),
    search: str | None = None,
    featured: bool | None = None,
    status: ProductStatus | None = None,
    sort: str = Query("createdAt", pattern="^(createdAt|updatedAt|price|name)$"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    user=Depends(get_optional_user),
    database=Depends(get_database),
) -> ProductListResponse:
    query = ListProducts(
        page=page,
        limit=limit,
        category=category,
        min_price=min_price,
        max_price=max_price,
        search=search,
        featured=featured,
        status=status,
        sort=sort,
        order=order,
    )
    products, pagination = BrowseProductsHandler(database).list_products(
        query, is_admin=bool(user and user.is_admin)
    )
    return ProductListResponse(products=_with_categories(database, products), pagination=pagination)


@product_router.get("/featured/list", response_model=ProductsResponse)
def featured_products(
    limit: int = Query(10, ge=1, le=100),
    database=Depends(get_database),
) -> ProductsResponse:
    products = BrowseProductsHandler(database).featured_products(limit=limit)
    return ProductsResponse(products=_with_categories(database, products))


@product_router.get("/{product_id}/related", response_model=ProductsResponse)
def related_products(
    product_id: str,
    limit: int = Query(6, ge=1, le=100),
    user=Depends(get_optional_user),
    database=Depends(get_database),
) -> ProductsResponse:
    products = BrowseProductsHandler(database).related_products(
        product_id, limit=limit, is_admin=bool(user and user.is_admin)
    )
    return ProductsResponse(products=_with_categories(database, products))


@product_router.get("/{identifier}", response_model=ProductDetailResponse)
def get_product(
    identifier: str,
    user=Depends(get_optional_user),
    database=Depends(get_database),
) -> ProductDetailResponse:
    product = BrowseProductsHandler(database).get_product(identifier, is_admin=bool(user and user.is_admin))
    return ProductDetailResponse(product=_with_category(database, product))


@product_router.post("", status_code=201, response_model=ProductDetailResponse)
def create_product(
    body: CreateProductRequest,
    admin=Depends(require_admin),
    database=Depends(get_database),
) -> ProductDetailResponse:
    product = ManageProductHandler(database).create_product(body)
    return ProductDetailResponse(message="Product created successfully", product=_with_category(database, product))


@product_router.put("/{product_id}", response_model=ProductDetailResponse)
def update_product(
    product_id: str,
    body: UpdateProductRequest,
    admin=Depends(require_admin),
    database=Depends(get_database),
) -> ProductDetailResponse:
    product = ManageProductHandler(database).update_product(product_id, body)
    return ProductDetailResponse(message="Product updated successfully", product=_with_category(database, product))


@product_router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: str,
    admin=Depends(require_admin),
    database=Depends(get_database),
) -> MessageResponse:
    ManageProductHandler(database).delete_product(product_id)
    return MessageResponse(message="Product deleted successfully")


# --- Category endpoints ---


@category_router.get("", response_model=CategoryListResponse)
def list_categories(database=Depends(get_database)) -> CategoryListResponse:
    categories = CategoryRepository(database).active()
    return CategoryListResponse(categories=[CategoryResponse.from_category(c) for c in categories])


@category_router.get("/{identifier}", response_model=CategoryDetailResponse)
def get_category(identifier: str, database=Depends(get_database)) -> CategoryDetailResponse:
    category = CategoryRepository(database).by_identifier(identifier)
    if category is None:
        raise ObjectNotFoundError({"_entity": ["Category not found"]})
    return CategoryDetailResponse(category=CategoryResponse.from_category(category))


@category_router.post("", status_code=201, response_model=CategoryDetailResponse)
def create_category(
    body: CreateCategoryRequest,
    admin=Depends(require_admin),
    database=Depends(get_database),
) -> CategoryDetailResponse:
    category = ManageCategoryHandler(database).create_category(body)
    return CategoryDetailResponse(
        message="Category created successfully",
        category=CategoryResponse.from_category(category),
    )

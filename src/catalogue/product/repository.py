"""Product persistence and the catalogue listing query."""

import math

import pymongo

from catalogue.product.product import Product, ProductStatus
from shared.database import PRODUCTS, is_object_id
from shared.repository import Repository

SORT_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "price": "price",
    "name": "name",
}


def build_listing_query(
    category=None,
    min_price=None,
    max_price=None,
    search=None,
    featured=None,
    status=ProductStatus.ACTIVE.value,
) -> dict:
    """Translate listing filters into a MongoDB filter document.

    ``status=None`` lists every status; callers decide who may do that.
    """
    query = {}
    if status is not None:
        query["status"] = status
    if category:
        query["category_id"] = str(category)
    if min_price is not None or max_price is not None:
        query["price"] = {}
        if min_price is not None:
            query["price"]["$gte"] = float(min_price)
        if max_price is not None:
            query["price"]["$lte"] = float(max_price)
    if search and search.strip():
        query["$text"] = {"$search": search.strip()}
    if featured:
        query["featured"] = True
    return query


class ProductRepository(Repository):
    aggregate_cls = Product
    collection_name = PRODUCTS
    not_found_message = "Product not found"

    def by_identifier(self, identifier):
        """Find by id when ``identifier`` looks like an ObjectId, otherwise by slug."""
        if is_object_id(identifier):
            return self.find(identifier)
        return self.find_one_by(slug=identifier.lower())

    def sku_taken(self, sku, exclude_id=None) -> bool:
        return self._taken("sku", sku, exclude_id)

    def slug_taken(self, slug, exclude_id=None) -> bool:
        return self._taken("slug", slug, exclude_id)

    def _taken(self, field, value, exclude_id):
        query = {field: value}
        if exclude_id is not None:
            query["_id"] = {"$ne": str(exclude_id)}
        return self.collection.count_documents(query, limit=1) > 0

    def list(self, query, sort="createdAt", order="desc", page=1, limit=20):
        """Return one page of products matching ``query`` and its pagination block."""
        direction = pymongo.ASCENDING if order == "asc" else pymongo.DESCENDING
        sort_field = SORT_FIELDS.get(sort, "created_at")

        cursor = (
            self.collection.find(query)
            .sort([(sort_field, direction), ("_id", direction)])
            .skip((page - 1) * limit)
            .limit(limit)
        )
        products = [Product.from_document(document) for document in cursor]
        total = self.collection.count_documents(query)

        return products, {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit) if limit else 0,
        }

    def featured(self, limit=10):
        return self._newest({"featured": True, "status": ProductStatus.ACTIVE.value}, limit)

    def related(self, product: Product, limit=6):
        return self._newest(
            {
                "_id": {"$ne": product.id},
                "category_id": product.category_id,
                "status": ProductStatus.ACTIVE.value,
            },
            limit,
        )

    def _newest(self, query, limit):
        cursor = self.collection.find(query).sort("created_at", pymongo.DESCENDING).limit(limit)
        return [Product.from_document(document) for document in cursor]

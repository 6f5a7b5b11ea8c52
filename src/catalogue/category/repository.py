import pymongo

from catalogue.category.category import Category
from shared.database import CATEGORIES, is_object_id
from shared.repository import Repository


class CategoryRepository(Repository):
    aggregate_cls = Category
    collection_name = CATEGORIES
    not_found_message = "Category not found"

    def by_identifier(self, identifier):
        if is_object_id(identifier):
            return self.find(identifier)
        return self.find_one_by(slug=identifier.lower())

    def active(self):
        cursor = self.collection.find({"is_active": True}).sort(
            [("sort_order", pymongo.ASCENDING), ("name", pymongo.ASCENDING)]
        )
        return [Category.from_document(document) for document in cursor]

    def summaries(self, category_ids) -> dict:
        """Map category id to ``{"id", "name", "slug"}`` for embedding in product responses."""
        cursor = self.collection.find({"_id": {"$in": list(set(category_ids))}}, {"name": 1, "slug": 1})
        return {
            document["_id"]: {"id": document["_id"], "name": document["name"], "slug": document["slug"]}
            for document in cursor
        }

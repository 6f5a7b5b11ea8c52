"""Document repositories.

A repository translates between an aggregate and its MongoDB document. It
never validates business rules; aggregates do that before they are saved.
"""

from pymongo.database import Database

from shared.exceptions import ObjectNotFoundError


class Repository:
    """Load and persist one aggregate type in one collection."""

    aggregate_cls = None
    collection_name = None
    not_found_message = "Resource not found"

    def __init__(self, database: Database):
        self.database = database
        self.collection = database[self.collection_name]

    def get(self, identifier):
        aggregate = self.find(identifier)
        if aggregate is None:
            raise ObjectNotFoundError({"_entity": [self.not_found_message]})
        return aggregate

    def find(self, identifier):
        document = self.collection.find_one({"_id": str(identifier)})
        return self.aggregate_cls.from_document(document) if document else None

    def find_one_by(self, **criteria):
        document = self.collection.find_one(criteria)
        return self.aggregate_cls.from_document(document) if document else None

    def add(self, aggregate):
        """Insert or fully replace the aggregate's document in a single write."""
        self.collection.replace_one({"_id": aggregate.id}, aggregate.to_document(), upsert=True)
        return aggregate

    def remove(self, aggregate) -> None:
        self.collection.delete_one({"_id": aggregate.id})

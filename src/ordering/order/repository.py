import math

import pymongo

from ordering.order.order import Order
from shared.database import ORDERS
from shared.exceptions import ObjectNotFoundError
from shared.repository import Repository


class OrderRepository(Repository):
    aggregate_cls = Order
    collection_name = ORDERS
    not_found_message = "Order not found"

    def get_for(self, order_id, user):
        """Load an order visible to ``user``: admins see every order, customers only their own."""
        order = self.get(order_id)
        if not user.is_admin and order.user_id != user.id:
            raise ObjectNotFoundError({"_entity": [self.not_found_message]})
        return order

    def list(self, user_id=None, status=None, page=1, limit=20):
        query = {}
        if user_id is not None:
            query["user_id"] = str(user_id)
        if status is not None:
            query["status"] = status

        cursor = (
            self.collection.find(query)
            .sort([("created_at", pymongo.DESCENDING), ("_id", pymongo.DESCENDING)])
            .skip((page - 1) * limit)
            .limit(limit)
        )
        orders = [Order.from_document(document) for document in cursor]
        total = self.collection.count_documents(query)
        return orders, {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit),
        }

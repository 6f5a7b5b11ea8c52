from pymongo.errors import DuplicateKeyError

from ordering.cart.cart import ShoppingCart
from shared.database import CARTS
from shared.repository import Repository


class CartRepository(Repository):
    aggregate_cls = ShoppingCart
    collection_name = CARTS
    not_found_message = "Cart not found"

    def for_user(self, user_id):
        return self.find_one_by(user_id=str(user_id))

    def get_or_create(self, user_id, ttl_days):
        """Return the owner's cart, creating an empty one on first use."""
        cart = self.for_user(user_id)
        if cart is None:
            cart = ShoppingCart.create(user_id=user_id, ttl_days=ttl_days)
            try:
                self.collection.insert_one(cart.to_document())
            except DuplicateKeyError:
                # A concurrent request created the owner's cart first
                cart = self.for_user(user_id)
        return cart

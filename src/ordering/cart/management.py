"""Cart management: loading and clearing the owner's cart."""

from ordering.cart.repository import CartRepository
from shared.config import get_settings
from shared.logging import get_logger

logger = get_logger(__name__)


class ManageCartHandler:
    def __init__(self, database):
        self.carts = CartRepository(database)
        self.ttl_days = get_settings().cart_ttl_days

    def get_cart(self, user_id):
        """Return the owner's cart, creating an empty one on first access."""
        return self.carts.get_or_create(user_id, self.ttl_days)

    def clear_cart(self, user_id):
        cart = self.carts.get_or_create(user_id, self.ttl_days)
        cart.clear(ttl_days=self.ttl_days)
        self.carts.add(cart)
        logger.debug("Cart cleared", cart_id=cart.id)
        return cart

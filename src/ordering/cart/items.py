"""Cart item management: commands and handler.

Prices are snapshotted from the catalogue when a line is added; later
catalogue price changes do not touch lines already in the cart.
"""

from pydantic import BaseModel, Field

from catalogue.product.product import has_stock_for
from catalogue.product.repository import ProductRepository
from ordering.cart.repository import CartRepository
from shared.config import get_settings
from shared.exceptions import ObjectNotFoundError, ValidationError
from shared.logging import get_logger

logger = get_logger(__name__)


class AddToCart(BaseModel):
    product_id: str = Field(..., min_length=1)
    variant_id: str | None = None
    quantity: int = Field(1, ge=1)


class UpdateCartQuantity(BaseModel):
    product_id: str = Field(..., min_length=1)
    variant_id: str | None = None
    quantity: int


class RemoveFromCart(BaseModel):
    product_id: str = Field(..., min_length=1)
    variant_id: str | None = None


class ManageCartItemsHandler:
    def __init__(self, database):
        self.carts = CartRepository(database)
        self.products = ProductRepository(database)
        self.ttl_days = get_settings().cart_ttl_days

    def add_to_cart(self, user_id, command: AddToCart):
        product = self.products.find(command.product_id)
        if product is None:
            raise ObjectNotFoundError({"product_id": ["Product not found"]})
        if not product.is_active():
            raise ValidationError({"product_id": ["Product is not available"]})

        price = product.unit_price(command.variant_id)

        cart = self.carts.get_or_create(user_id, self.ttl_days)
        existing = cart.find_item(command.product_id, command.variant_id)
        requested = command.quantity + (existing.quantity if existing else 0)
        if not has_stock_for(product, requested, command.variant_id):
            raise ValidationError({"quantity": ["Insufficient stock"]})

        cart.add_item(
            product_id=command.product_id,
            variant_id=command.variant_id,
            quantity=command.quantity,
            price=price,
            ttl_days=self.ttl_days,
        )
        self.carts.add(cart)
        logger.debug("Item added to cart", cart_id=cart.id, product_id=command.product_id)
        return cart

    def update_cart_quantity(self, user_id, command: UpdateCartQuantity):
        cart = self.carts.get_or_create(user_id, self.ttl_days)

        if command.quantity > 0 and cart.find_item(command.product_id, command.variant_id):
            product = self.products.find(command.product_id)
            if product is not None and not has_stock_for(product, command.quantity, command.variant_id):
                raise ValidationError({"quantity": ["Insufficient stock"]})

        cart.update_item_quantity(
            product_id=command.product_id,
            variant_id=command.variant_id,
            quantity=command.quantity,
            ttl_days=self.ttl_days,
        )
        self.carts.add(cart)
        return cart

    def remove_from_cart(self, user_id, command: RemoveFromCart):
        cart = self.carts.get_or_create(user_id, self.ttl_days)
        cart.remove_item(
            product_id=command.product_id,
            variant_id=command.variant_id,
            ttl_days=self.ttl_days,
        )
        self.carts.add(cart)
        return cart

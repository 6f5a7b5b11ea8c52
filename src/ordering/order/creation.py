"""Order placement: command and handler.

Checkout turns the owner's cart into an order:

1. Load the cart and refuse an empty one
2. Snapshot name and SKU of every product, keeping the cart's price snapshot
3. Reserve an order number from the counter
4. Persist the order and clear the cart
"""

from pydantic import BaseModel, Field

from catalogue.product.repository import ProductRepository
from ordering.cart.repository import CartRepository
from ordering.order.numbering import next_order_number
from ordering.order.order import MAX_NOTES_LENGTH, Address, Order, PaymentMethod
from ordering.order.repository import OrderRepository
from shared.config import get_settings
from shared.exceptions import ValidationError
from shared.logging import get_logger

logger = get_logger(__name__)


class PlaceOrder(BaseModel):
    shipping_address: Address
    billing_address: Address | None = None
    payment_method: PaymentMethod
    tax: float = Field(0.0, ge=0)
    shipping: float = Field(0.0, ge=0)
    discount: float = Field(0.0, ge=0)
    currency: str = Field("USD", min_length=3, max_length=3)
    notes: str | None = Field(None, max_length=MAX_NOTES_LENGTH)


class PlaceOrderHandler:
    def __init__(self, database):
        self.database = database
        self.carts = CartRepository(database)
        self.products = ProductRepository(database)
        self.orders = OrderRepository(database)

    def place_order(self, user_id, command: PlaceOrder) -> Order:
        cart = self.carts.for_user(user_id)
        if cart is None or not cart.items:
            raise ValidationError({"cart": ["Cart is empty"]})

        items_data = []
        for line in cart.items:
            product = self.products.find(line.product_id)
            if product is None or not product.is_active():
                raise ValidationError({"items": [f"Product {line.product_id} is no longer available"]})

            items_data.append(
                {
                    "product_id": line.product_id,
                    "variant_id": line.variant_id,
                    "name": product.name,
                    "sku": product.sku_for(line.variant_id),
                    "quantity": line.quantity,
                    "price": line.price,
                }
            )

        order = Order.create(
            order_number=next_order_number(self.database),
            user_id=user_id,
            items_data=items_data,
            shipping_address=command.shipping_address,
            billing_address=command.billing_address,
            payment_method=command.payment_method,
            tax=command.tax,
            shipping=command.shipping,
            discount=command.discount,
            currency=command.currency,
            notes=command.notes,
        )
        self.orders.add(order)

        cart.clear(ttl_days=get_settings().cart_ttl_days)
        self.carts.add(cart)

        logger.info(
            "Order placed",
            order_id=order.id,
            order_number=order.order_number,
            user_id=order.user_id,
            total=order.total,
        )
        return order

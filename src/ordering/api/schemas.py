"""Pydantic request/response schemas for the Ordering API.

Request schemas extend the commands they are translated into; response
schemas are the external view of carts and orders.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from ordering.cart.cart import ShoppingCart
from ordering.cart.items import AddToCart
from ordering.order.cancellation import CancelOrder
from ordering.order.creation import PlaceOrder
from ordering.order.lifecycle import AddOrderNote, UpdateOrderStatus
from ordering.order.order import Address, Order, OrderItem, StatusChange
from ordering.order.payment import UpdatePayment
from ordering.pricing import line_total


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(AddToCart):
    model_config = {
        "json_schema_extra": {
            "examples": [{"product_id": "65a1f0c2e4b0a1b2c3d4e5f6", "variant_id": None, "quantity": 2}]
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    """A quantity of zero or less removes the line."""

    quantity: int
    variant_id: str | None = None


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(PlaceOrder):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": {
                        "street": "123 Elm Street",
                        "city": "Springfield",
                        "state": "IL",
                        "zip_code": "62701",
                        "country": "US",
                    },
                    "payment_method": "stripe",
                    "shipping": 5.0,
                    "notes": "Leave at the front door",
                }
            ]
        }
    }


class UpdateOrderStatusRequest(UpdateOrderStatus):
    model_config = {"json_schema_extra": {"examples": [{"status": "shipped", "note": "Handed to carrier"}]}}


class AddOrderNoteRequest(AddOrderNote):
    pass


class UpdatePaymentRequest(UpdatePayment):
    model_config = {
        "json_schema_extra": {"examples": [{"payment_status": "paid", "payment_id": "pi_3N8x2LJ0a1b2c3d4"}]}
    }


class CancelOrderRequest(CancelOrder):
    pass


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartItemResponse(BaseModel):
    product_id: str
    variant_id: str | None = None
    quantity: int
    price: float
    total: float
    added_at: datetime


class CartResponse(BaseModel):
    id: str
    user_id: str
    items: list[CartItemResponse] = Field(default_factory=list)
    total_items: int
    subtotal: float
    created_at: datetime
    updated_at: datetime
    expires_at: datetime | None = None

    @classmethod
    def from_cart(cls, cart: ShoppingCart) -> "CartResponse":
        return cls(
            id=cart.id,
            user_id=cart.user_id,
            items=[
                CartItemResponse(**item.model_dump(), total=line_total(item.price, item.quantity))
                for item in cart.items
            ],
            total_items=cart.total_items,
            subtotal=cart.subtotal,
            created_at=cart.created_at,
            updated_at=cart.updated_at,
            expires_at=cart.expires_at,
        )


class CartEnvelope(BaseModel):
    message: str | None = None
    cart: CartResponse


class OrderResponse(BaseModel):
    id: str
    order_number: str
    user_id: str
    items: list[OrderItem]
    total_items: int
    subtotal: float
    tax: float
    shipping: float
    discount: float
    total: float
    currency: str
    status: str
    payment_status: str
    payment_method: str
    payment_id: str | None = None
    shipping_address: Address
    billing_address: Address
    tracking_number: str | None = None
    tracking_url: str | None = None
    notes: str | None = None
    status_history: list[StatusChange]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_order(cls, order: Order) -> "OrderResponse":
        return cls(**order.model_dump(), total_items=order.total_items)


class OrderEnvelope(BaseModel):
    message: str | None = None
    order: OrderResponse


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    pagination: Pagination

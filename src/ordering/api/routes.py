"""FastAPI routes for the Ordering domain: the caller's cart and orders."""

from fastapi import APIRouter, Depends, Query

from identity.api.dependencies import get_current_user, require_admin
from identity.user.user import User
from ordering.api.schemas import (
    AddOrderNoteRequest,
    AddToCartRequest,
    CancelOrderRequest,
    CartEnvelope,
    CartResponse,
    OrderEnvelope,
    OrderListResponse,
    OrderResponse,
    PlaceOrderRequest,
    UpdateCartQuantityRequest,
    UpdateOrderStatusRequest,
    UpdatePaymentRequest,
)
from ordering.cart.items import ManageCartItemsHandler, RemoveFromCart, UpdateCartQuantity
from ordering.cart.management import ManageCartHandler
from ordering.order.cancellation import CancelOrderHandler
from ordering.order.creation import PlaceOrderHandler
from ordering.order.lifecycle import OrderLifecycleHandler
from ordering.order.order import OrderStatus
from ordering.order.payment import RecordPaymentHandler
from ordering.order.repository import OrderRepository
from shared.database import get_database

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartEnvelope)
def get_cart(user: User = Depends(get_current_user), database=Depends(get_database)) -> CartEnvelope:
    cart = ManageCartHandler(database).get_cart(user.id)
    return CartEnvelope(cart=CartResponse.from_cart(cart))


@cart_router.post("/items", response_model=CartEnvelope)
def add_cart_item(
    body: AddToCartRequest,
    user: User = Depends(get_current_user),
    database=Depends(get_database),
) -> CartEnvelope:
    cart = ManageCartItemsHandler(database).add_to_cart(user.id, body)
    return CartEnvelope(message="Item added to cart", cart=CartResponse.from_cart(cart))


@cart_router.put("/items/{product_id}", response_model=CartEnvelope)
def update_cart_item_quantity(
    product_id: str,
    body: UpdateCartQuantityRequest,
    user: User = Depends(get_current_user),
    database=Depends(get_database),
) -> CartEnvelope:
    command = UpdateCartQuantity(
        product_id=product_id,
        variant_id=body.variant_id,
        quantity=body.quantity,
    )
    cart = ManageCartItemsHandler(database).update_cart_quantity(user.id, command)
    return CartEnvelope(message="Cart updated", cart=CartResponse.from_cart(cart))


@cart_router.delete("/items/{product_id}", response_model=CartEnvelope)
def remove_cart_item(
    product_id: str,
    variant_id: str | None = None,
    user: User = Depends(get_current_user),
    database=Depends(get_database),
) -> CartEnvelope:
    command = RemoveFromCart(product_id=product_id, variant_id=variant_id)
    cart = ManageCartItemsHandler(database).remove_from_cart(user.id, command)
    return CartEnvelope(message="Item removed from cart", cart=CartResponse.from_cart(cart))


@cart_router.delete("", response_model=CartEnvelope)
def clear_cart(user: User = Depends(get_current_user), database=Depends(get_database)) -> CartEnvelope:
    cart = ManageCartHandler(database).clear_cart(user.id)
    return CartEnvelope(message="Cart cleared", cart=CartResponse.from_cart(cart))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderEnvelope)
def place_order(
    body: PlaceOrderRequest,
    user: User = Depends(get_current_user),
    database=Depends(get_database),
) -> OrderEnvelope:
    order = PlaceOrderHandler(database).place_order(user.id, body)
    return OrderEnvelope(message="Order placed successfully", order=OrderResponse.from_order(order))


@order_router.get("", response_model=OrderListResponse)
def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: OrderStatus | None = None,
    user: User = Depends(get_current_user),
    database=Depends(get_database),
) -> OrderListResponse:
    """Customers see their own orders; administrators see every order."""
    orders, pagination = OrderRepository(database).list(
        user_id=None if user.is_admin else user.id,
        status=status.value if status else None,
        page=page,
        limit=limit,
    )
    return OrderListResponse(orders=[OrderResponse.from_order(o) for o in orders], pagination=pagination)


@order_router.get("/{order_id}", response_model=OrderEnvelope)
def get_order(
    order_id: str,
    user: User = Depends(get_current_user),
    database=Depends(get_database),
) -> OrderEnvelope:
    order = OrderRepository(database).get_for(order_id, user)
    return OrderEnvelope(order=OrderResponse.from_order(order))


@order_router.put("/{order_id}/status", response_model=OrderEnvelope)
def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    admin: User = Depends(require_admin),
    database=Depends(get_database),
) -> OrderEnvelope:
    order = OrderLifecycleHandler(database).update_status(order_id, body)
    return OrderEnvelope(message="Order status updated", order=OrderResponse.from_order(order))


@order_router.post("/{order_id}/notes", response_model=OrderEnvelope)
def add_order_note(
    order_id: str,
    body: AddOrderNoteRequest,
    admin: User = Depends(require_admin),
    database=Depends(get_database),
) -> OrderEnvelope:
    order = OrderLifecycleHandler(database).add_note(order_id, body)
    return OrderEnvelope(message="Note added", order=OrderResponse.from_order(order))


@order_router.put("/{order_id}/payment", response_model=OrderEnvelope)
def update_order_payment(
    order_id: str,
    body: UpdatePaymentRequest,
    admin: User = Depends(require_admin),
    database=Depends(get_database),
) -> OrderEnvelope:
    order = RecordPaymentHandler(database).update_payment(order_id, body)
    return OrderEnvelope(message="Payment details updated", order=OrderResponse.from_order(order))


@order_router.post("/{order_id}/cancel", response_model=OrderEnvelope)
def cancel_order(
    order_id: str,
    body: CancelOrderRequest | None = None,
    user: User = Depends(get_current_user),
    database=Depends(get_database),
) -> OrderEnvelope:
    order = CancelOrderHandler(database).cancel_order(order_id, user, body or CancelOrderRequest())
    return OrderEnvelope(message="Order cancelled", order=OrderResponse.from_order(order))

"""Order aggregate: the core of the ordering domain.

An order is created once from a snapshot of the owner's cart. Line items,
prices and addresses are frozen at that moment; afterwards only the status,
payment, tracking and charges change. Every status change is recorded
in an append-only history.

State Machine:
    PENDING → CONFIRMED → PROCESSING → SHIPPED → DELIVERED → REFUNDED
    CANCELLED (from PENDING, CONFIRMED, PROCESSING)
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ordering.pricing import cart_item_count, line_total, order_total, round_money
from shared.exceptions import ValidationError
from shared.model import Aggregate, utc_now

MAX_NOTES_LENGTH = 1000


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"
    PARTIALLY_REFUNDED = "partially_refunded"


class PaymentMethod(Enum):
    STRIPE = "stripe"
    PAYPAL = "paypal"
    CASH_ON_DELIVERY = "cash_on_delivery"
    BANK_TRANSFER = "bank_transfer"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: {OrderStatus.REFUNDED},
    OrderStatus.CANCELLED: set(),  # Terminal
    OrderStatus.REFUNDED: set(),  # Terminal
}

# States from which cancellation is allowed
_CANCELLABLE_STATES = {
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PROCESSING,
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
class Address(BaseModel):
    """A delivery or billing address captured at checkout time.

    Once recorded on an Order, the address is immutable: it represents where
    the order was shipped, regardless of later changes to the account.
    """

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    street: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    state: str = Field(min_length=1, max_length=100)
    zip_code: str = Field(min_length=1, max_length=20)
    country: str = Field(min_length=1, max_length=100)


class StatusChange(BaseModel):
    status: OrderStatus
    timestamp: datetime = Field(default_factory=utc_now)
    note: str | None = None

    model_config = ConfigDict(use_enum_values=True)


class OrderItem(BaseModel):
    """A line item, snapshotted from the cart and the catalogue at checkout."""

    product_id: str
    variant_id: str | None = None
    name: str = Field(min_length=1)
    sku: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    price: float = Field(ge=0)
    total: float = Field(ge=0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
class Order(Aggregate):
    order_number: str
    user_id: str
    items: list[OrderItem] = Field(min_length=1)
    subtotal: float = Field(ge=0)
    tax: float = Field(default=0.0, ge=0)
    shipping: float = Field(default=0.0, ge=0)
    discount: float = Field(default=0.0, ge=0)
    total: float = Field(ge=0)
    currency: str = "USD"
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: PaymentMethod
    payment_id: str | None = None
    shipping_address: Address
    billing_address: Address
    tracking_number: str | None = None
    tracking_url: str | None = None
    notes: str | None = Field(default=None, max_length=MAX_NOTES_LENGTH)
    status_history: list[StatusChange] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        order_number,
        user_id,
        items_data,
        shipping_address,
        payment_method,
        billing_address=None,
        subtotal=None,
        tax=0.0,
        shipping=0.0,
        discount=0.0,
        currency="USD",
        notes=None,
    ):
        """Create a new order from checkout data.

        Args:
            order_number: Number reserved from the order counter.
            user_id: The account placing the order.
            items_data: List of dicts with product_id, variant_id, name, sku,
                        quantity, price.
            shipping_address: Dict or Address with street, city, state,
                              zip_code, country.
            payment_method: One of ``PaymentMethod``.
            billing_address: Defaults to the shipping address.
            subtotal: Computed from the item totals when not supplied.
        """
        if not items_data:
            raise ValidationError({"items": ["Order must contain at least one item"]})

        items = [
            OrderItem(**item, total=line_total(item["price"], item["quantity"]))
            for item in items_data
        ]
        if subtotal is None:
            subtotal = sum(item.total for item in items)

        subtotal, tax, shipping, discount = (round_money(v) for v in (subtotal, tax, shipping, discount))
        total = order_total(subtotal, tax, shipping, discount)
        if total < 0:
            raise ValidationError({"discount": ["Discount cannot exceed the order amount"]})

        now = utc_now()
        return cls(
            order_number=order_number,
            user_id=str(user_id),
            items=items,
            subtotal=subtotal,
            tax=tax,
            shipping=shipping,
            discount=discount,
            total=total,
            currency=currency.upper(),
            payment_method=payment_method,
            shipping_address=shipping_address,
            billing_address=billing_address or shipping_address,
            notes=notes,
            status_history=[StatusChange(status=OrderStatus.PENDING, timestamp=now, note="Order placed")],
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def total_items(self) -> int:
        return cart_item_count(self.items)

    def is_cancellable(self) -> bool:
        return OrderStatus(self.status) in _CANCELLABLE_STATES

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def _record(self, status, note):
        now = utc_now()
        self.status_history.append(StatusChange(status=status, timestamp=now, note=note or None))
        self.updated_at = now

    def _recalculate_total(self):
        total = order_total(self.subtotal, self.tax, self.shipping, self.discount)
        if total < 0:
            raise ValidationError({"discount": ["Discount cannot exceed the order amount"]})
        self.total = total

    # -------------------------------------------------------------------
    # Order lifecycle transitions
    # -------------------------------------------------------------------
    def update_status(self, status, note=""):
        """Move the order to ``status`` and append a history entry."""
        target = OrderStatus(status)
        self._assert_can_transition(target)

        self.status = target.value
        self._record(target.value, note)

    def cancel(self, note=""):
        if not self.is_cancellable():
            raise ValidationError({"status": [f"Order cannot be cancelled when {self.status}"]})
        self.update_status(OrderStatus.CANCELLED, note)

    def add_status_note(self, note):
        """Append a history entry for the current status without changing it."""
        if not note or not note.strip():
            raise ValidationError({"note": ["Note cannot be empty"]})
        self._record(self.status, note.strip())

    # -------------------------------------------------------------------
    # Payment, shipping and charges
    # -------------------------------------------------------------------
    def update_payment_status(self, payment_status, payment_id=None):
        self.payment_status = PaymentStatus(payment_status).value
        if payment_id:
            self.payment_id = payment_id
        self.updated_at = utc_now()

    def set_tracking(self, tracking_number, tracking_url=None):
        self.tracking_number = tracking_number
        if tracking_url is not None:
            self.tracking_url = tracking_url
        self.updated_at = utc_now()

    def adjust_charges(self, tax=None, shipping=None, discount=None):
        """Change tax, shipping or discount; the total is always recomputed."""
        for name, value in (("tax", tax), ("shipping", shipping), ("discount", discount)):
            if value is None:
                continue
            if value < 0:
                raise ValidationError({name: [f"{name.capitalize()} cannot be negative"]})
            setattr(self, name, round_money(value))

        self._recalculate_total()
        self.updated_at = utc_now()


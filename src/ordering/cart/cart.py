"""Shopping Cart aggregate: one mutable collection of line items per account.

Each line snapshots the unit price at the moment the product was added. A
line is identified by its ``(product_id, variant_id)`` pair, so adding the
same pair twice merges the quantities instead of creating a second line.
Every write pushes ``expires_at`` forward; a TTL index removes carts that
have not been touched for ``CART_TTL_DAYS``.
"""

from datetime import datetime, timedelta

from pydantic import BaseModel, Field

from ordering.pricing import cart_item_count, items_subtotal
from shared.exceptions import ValidationError
from shared.model import Aggregate, utc_now

DEFAULT_TTL_DAYS = 30


class CartItem(BaseModel):
    product_id: str
    variant_id: str | None = None
    quantity: int = Field(ge=1)
    price: float = Field(ge=0)
    added_at: datetime = Field(default_factory=utc_now)

    def matches(self, product_id, variant_id=None) -> bool:
        return self.product_id == str(product_id) and self.variant_id == (
            str(variant_id) if variant_id is not None else None
        )


class ShoppingCart(Aggregate):
    user_id: str
    items: list[CartItem] = Field(default_factory=list)
    session_token: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime | None = None

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id, session_token=None, ttl_days=DEFAULT_TTL_DAYS):
        now = utc_now()
        return cls(
            user_id=str(user_id),
            session_token=session_token,
            created_at=now,
            updated_at=now,
            expires_at=now + timedelta(days=ttl_days),
        )

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def total_items(self) -> int:
        return cart_item_count(self.items)

    @property
    def subtotal(self) -> float:
        return items_subtotal(self.items)

    def find_item(self, product_id, variant_id=None):
        return next((i for i in self.items if i.matches(product_id, variant_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity, price, variant_id=None, ttl_days=DEFAULT_TTL_DAYS):
        """Add a line, or increase the quantity of the matching one."""
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})
        if price is None or price < 0:
            raise ValidationError({"price": ["Price cannot be negative"]})

        existing = self.find_item(product_id, variant_id)
        if existing:
            existing.quantity += quantity
        else:
            self.items.append(
                CartItem(
                    product_id=str(product_id),
                    variant_id=str(variant_id) if variant_id is not None else None,
                    quantity=quantity,
                    price=price,
                )
            )

        self._touch(ttl_days)
        return self.find_item(product_id, variant_id)

    def update_item_quantity(self, product_id, quantity, variant_id=None, ttl_days=DEFAULT_TTL_DAYS):
        """Set a line's quantity; a quantity of zero or less removes the line.

        Unknown lines are left alone.
        """
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise ValidationError({"quantity": ["Quantity must be an integer"]})

        item = self.find_item(product_id, variant_id)
        if item is None:
            return

        if quantity <= 0:
            self.items.remove(item)
        else:
            item.quantity = quantity

        self._touch(ttl_days)

    def remove_item(self, product_id, variant_id=None, ttl_days=DEFAULT_TTL_DAYS):
        """Remove the matching line. Removing an absent line is a no-op."""
        self.items = [i for i in self.items if not i.matches(product_id, variant_id)]
        self._touch(ttl_days)

    def clear(self, ttl_days=DEFAULT_TTL_DAYS):
        self.items = []
        self._touch(ttl_days)

    def _touch(self, ttl_days):
        now = utc_now()
        self.updated_at = now
        self.expires_at = now + timedelta(days=ttl_days)

    # -------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------
    def to_document(self) -> dict:
        document = super().to_document()
        # The session token index is sparse: absent tokens must not be stored as null
        if document.get("session_token") is None:
            document.pop("session_token", None)
        return document

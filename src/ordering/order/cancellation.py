"""Order cancellation: command and handler."""

from pydantic import BaseModel, Field

from ordering.order.repository import OrderRepository
from shared.logging import get_logger

logger = get_logger(__name__)


class CancelOrder(BaseModel):
    reason: str = Field("", max_length=500)


class CancelOrderHandler:
    def __init__(self, database):
        self.orders = OrderRepository(database)

    def cancel_order(self, order_id, user, command: CancelOrder):
        """Cancel an order the caller can see. Customers may only cancel their own."""
        order = self.orders.get_for(order_id, user)
        cancelled_by = "admin" if user.is_admin else "customer"
        note = f"Cancelled by {cancelled_by}"
        if command.reason:
            note = f"{note}: {command.reason}"

        order.cancel(note)
        self.orders.add(order)

        logger.info(
            "Order cancelled",
            order_id=order.id,
            order_number=order.order_number,
            cancelled_by=cancelled_by,
        )
        return order

"""Order status changes: commands and handler.

Status changes are an administrative action. Each one appends exactly one
entry to the order's status history.
"""

from pydantic import BaseModel, Field

from ordering.order.order import OrderStatus
from ordering.order.repository import OrderRepository
from shared.logging import get_logger

logger = get_logger(__name__)


class UpdateOrderStatus(BaseModel):
    status: OrderStatus
    note: str = Field("", max_length=500)


class AddOrderNote(BaseModel):
    """Record a remark in the history without changing the status."""

    note: str = Field(..., min_length=1, max_length=500)


class OrderLifecycleHandler:
    def __init__(self, database):
        self.orders = OrderRepository(database)

    def update_status(self, order_id, command: UpdateOrderStatus):
        order = self.orders.get(order_id)
        previous = order.status
        order.update_status(command.status, command.note)
        self.orders.add(order)

        logger.info(
            "Order status updated",
            order_id=order.id,
            order_number=order.order_number,
            previous_status=previous,
            status=order.status,
        )
        return order

    def add_note(self, order_id, command: AddOrderNote):
        order = self.orders.get(order_id)
        order.add_status_note(command.note)
        self.orders.add(order)
        return order

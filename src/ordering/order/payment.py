"""Order payment, tracking and charges: commands and handler.

Payment gateways are not integrated; an administrator (or a gateway
callback acting as one) records the outcome here.
"""

from pydantic import BaseModel, Field

from ordering.order.order import PaymentStatus
from ordering.order.repository import OrderRepository
from shared.logging import get_logger

logger = get_logger(__name__)


class UpdatePayment(BaseModel):
    """Record a payment outcome and, optionally, tracking details or new charges."""

    payment_status: PaymentStatus | None = None
    payment_id: str | None = Field(None, max_length=255)
    tracking_number: str | None = Field(None, max_length=255)
    tracking_url: str | None = Field(None, max_length=500)
    tax: float | None = Field(None, ge=0)
    shipping: float | None = Field(None, ge=0)
    discount: float | None = Field(None, ge=0)


class RecordPaymentHandler:
    def __init__(self, database):
        self.orders = OrderRepository(database)

    def update_payment(self, order_id, command: UpdatePayment):
        order = self.orders.get(order_id)

        if command.payment_status is not None:
            order.update_payment_status(command.payment_status, command.payment_id)
        if command.tracking_number is not None:
            order.set_tracking(command.tracking_number, command.tracking_url)
        if any(v is not None for v in (command.tax, command.shipping, command.discount)):
            order.adjust_charges(tax=command.tax, shipping=command.shipping, discount=command.discount)

        self.orders.add(order)
        logger.info(
            "Order payment updated",
            order_id=order.id,
            payment_status=order.payment_status,
            total=order.total,
        )
        return order

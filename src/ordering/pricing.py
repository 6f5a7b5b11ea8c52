"""Money arithmetic shared by the cart and the order aggregates.

Amounts are floats rounded to cents at every boundary so that repeated
recomputation is stable.
"""


def round_money(amount) -> float:
    return round(float(amount or 0.0), 2)


def line_total(price, quantity) -> float:
    """Price of a single line: unit price times quantity."""
    return round_money(price * quantity)


def items_subtotal(items) -> float:
    """Sum of price x quantity over line items exposing ``price`` and ``quantity``."""
    return round_money(sum(item.price * item.quantity for item in items))


def cart_item_count(items) -> int:
    """Total number of units across line items."""
    return sum(item.quantity for item in items)


def order_total(subtotal, tax=0.0, shipping=0.0, discount=0.0) -> float:
    """Grand total: subtotal + tax + shipping - discount."""
    return round_money(subtotal + tax + shipping - discount)

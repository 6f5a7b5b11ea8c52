"""Order numbers: ``ORD`` followed by a six digit, zero padded sequence.

Numbers come from a counter document incremented atomically by the store,
so two checkouts running at the same time never receive the same number.
"""

from pymongo import ReturnDocument

from shared.database import COUNTERS

ORDER_NUMBER_PREFIX = "ORD"
ORDER_SEQUENCE = "order_number"


def format_order_number(sequence: int) -> str:
    return f"{ORDER_NUMBER_PREFIX}{sequence:06d}"


def next_sequence(database, name=ORDER_SEQUENCE) -> int:
    counter = database[COUNTERS].find_one_and_update(
        {"_id": name},
        {"$inc": {"value": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return counter["value"]


def next_order_number(database) -> str:
    return format_order_number(next_sequence(database))

"""Order number format and uniqueness under concurrent checkouts."""

import threading
from concurrent.futures import ThreadPoolExecutor

from ordering.order.numbering import format_order_number, next_order_number, next_sequence
from shared.database import ORDERS


class TestFormat:
    def test_zero_padded_to_six_digits(self):
        assert format_order_number(1) == "ORD000001"
        assert format_order_number(42) == "ORD000042"

    def test_wider_sequences_are_not_truncated(self):
        assert format_order_number(1234567) == "ORD1234567"


class TestSequence:
    def test_first_number(self, database):
        assert next_order_number(database) == "ORD000001"

    def test_numbers_increase(self, database):
        numbers = [next_order_number(database) for _ in range(3)]
        assert numbers == ["ORD000001", "ORD000002", "ORD000003"]

    def test_sequences_are_independent(self, database):
        next_sequence(database, "other")
        next_sequence(database, "other")
        assert next_order_number(database) == "ORD000001"

    def test_counting_existing_orders_collides_when_interleaved(self, database):
        # Two checkouts that both count orders before either inserts
        # would compute the same number.
        first = format_order_number(database[ORDERS].count_documents({}) + 1)
        second = format_order_number(database[ORDERS].count_documents({}) + 1)
        assert first == second

    def test_concurrent_checkouts_get_distinct_numbers(self, database):
        workers = 16
        barrier = threading.Barrier(workers)

        def checkout(_):
            barrier.wait()
            return next_order_number(database)

        with ThreadPoolExecutor(max_workers=workers) as pool:
            numbers = list(pool.map(checkout, range(workers)))

        assert len(set(numbers)) == workers
        assert sorted(numbers) == [format_order_number(n) for n in range(1, workers + 1)]

"""The restaurant: its tables, staff, buffet and waiting queues."""

from __future__ import annotations

from typing import Optional

from .models import Buffet, Cashier, ClientQueue, Manager, Table, Waiter

DOUBLE_TABLES = 4
TRIPLE_TABLES = 14
FOUR_PERSON_TABLES = 4
NUMBER_OF_WAITERS = 13
# The model staffs one cashier per waiter.
NUMBER_OF_CASHIERS = NUMBER_OF_WAITERS
PLACES_IN_BUFFET = 20


class Restaurant:
    """The whole restaurant model with its fixed layout."""

    def __init__(self) -> None:
        self.tables: list[Table] = (
            [Table(2) for _ in range(DOUBLE_TABLES)]
            + [Table(3) for _ in range(TRIPLE_TABLES)]
            + [Table(4) for _ in range(FOUR_PERSON_TABLES)]
        )
        self.waiters: list[Waiter] = [Waiter() for _ in range(NUMBER_OF_WAITERS)]
        self.cashiers: list[Cashier] = [Cashier() for _ in range(NUMBER_OF_CASHIERS)]
        self.table_queue = ClientQueue()
        self.buffet_queue = ClientQueue()
        self.cashier_queue = ClientQueue()
        self.manager = Manager()
        self.buffet = Buffet(PLACES_IN_BUFFET)

    def free_cashier_index(self) -> Optional[int]:
        """Index of the first free cashier, or None when all are busy."""
        return next((i for i, c in enumerate(self.cashiers) if c.is_free()), None)

    def free_waiter_index(self) -> Optional[int]:
        """Index of the first free waiter, or None when all are busy."""
        return next((i for i, w in enumerate(self.waiters) if w.is_free), None)

    def largest_free_table(self) -> int:
        """Seat count of the largest free table, 0 when none is free."""
        return max((t.size for t in self.tables if t.is_free), default=0)

    def can_seat(self) -> bool:
        """Whether some waiting group fits at a currently free table."""
        largest = self.largest_free_table()
        if largest <= 0:
            return False
        return any(group.size <= largest for group in self.table_queue)
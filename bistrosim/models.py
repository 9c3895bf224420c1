"""Entities of the restaurant model: client groups, staff, tables, queues and events."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, Optional


@dataclass(eq=False)
class GroupOfClients:
    """A group of clients moving through the restaurant together.

    Table guests use the manager, drink, meal and consumption times;
    buffet guests use the buffet time. Both use the cashier time.
    Each time field holds a duration until its service starts, and
    then the absolute time at which that service ends.
    """

    client_id: int
    size: int
    time_appear: float = 0.0
    time_manager: float = 0.0
    time_meal: float = 0.0
    time_drink: float = 0.0
    time_consumption: float = 0.0
    time_buffet: float = 0.0
    time_cashier: float = 0.0
    alarm_sensitive: bool = False


@dataclass(eq=False)
class Table:
    """A table with a fixed number of seats, taken by at most one group."""

    size: int = 0
    client: Optional[GroupOfClients] = None

    @property
    def is_free(self) -> bool:
        return self.client is None


@dataclass(eq=False)
class Waiter:
    """A waiter serving at most one group at a time."""

    group: Optional[GroupOfClients] = None

    @property
    def is_free(self) -> bool:
        return self.group is None


@dataclass(eq=False)
class Cashier:
    """A cashier serving at most one group at a time."""

    group: Optional[GroupOfClients] = None

    def is_free(self) -> bool:
        """Return True when no group is being served."""
        return self.group is None

    def assign(self, group: GroupOfClients) -> None:
        """Start serving the given group."""
        self.group = group

    def release(self) -> None:
        """Stop serving the current group."""
        self.group = None


@dataclass(eq=False)
class Manager:
    """The manager who leads groups from the queue to their table."""

    busy: bool = False
    group: Optional[GroupOfClients] = None


class EventKind(IntEnum):
    """Kinds of timed events in the simulation."""

    ALARM = 0
    ARRIVAL = 1
    BUFFET_END = 2
    CASHIER_END = 3
    MANAGER_END = 4
    DRINK_SERVED = 5
    MEAL_SERVED = 6
    CONSUMPTION_END = 7


@dataclass(eq=False)
class Event:
    """A timed event, optionally tied to the waiter or table that handles it."""

    kind: EventKind = EventKind.ALARM
    time: float = 0.0
    waiter: Optional[Waiter] = None
    table: Optional[Table] = None


class ClientQueue:
    """A first-in first-out queue of client groups."""

    def __init__(self) -> None:
        self._items: deque[GroupOfClients] = deque()

    def push(self, group: GroupOfClients) -> None:
        """Add a group at the back of the queue."""
        self._items.append(group)

    def peek(self) -> GroupOfClients:
        """Return the group at the front without removing it."""
        if not self._items:
            raise IndexError("peek from an empty queue")
        return self._items[0]

    def pop(self) -> GroupOfClients:
        """Remove and return the group at the front."""
        if not self._items:
            raise IndexError("pop from an empty queue")
        return self._items.popleft()

    def remove_group(self, group_id: int) -> int:
        """Drop every group with the given id, keeping the others in order.

        Returns the number of groups removed.
        """
        kept = deque(g for g in self._items if g.client_id != group_id)
        removed = len(self._items) - len(kept)
        self._items = kept
        return removed

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[GroupOfClients]:
        return iter(list(self._items))


@dataclass(eq=False)
class Buffet:
    """A buffet counter with a fixed number of seats, one client per seat."""

    size: int
    seats: list[Optional[GroupOfClients]] = field(init=False)

    def __post_init__(self) -> None:
        self.seats = [None] * self.size

    @property
    def busy_places(self) -> int:
        """Number of taken seats."""
        return sum(seat is not None for seat in self.seats)

    def free_places(self) -> int:
        """Number of empty seats."""
        return self.size - self.busy_places

    def sit_in(self, group: GroupOfClients) -> bool:
        """Seat every member of the group; return False if there is no room."""
        empty = [i for i, seat in enumerate(self.seats) if seat is None]
        if len(empty) < group.size:
            return False
        for i in empty[: group.size]:
            self.seats[i] = group
        return True

    def sit_out(self, position: int) -> GroupOfClients:
        """Free every seat of the group sitting at position and return that group."""
        group = self.seats[position]
        if group is None:
            raise ValueError(f"buffet seat {position} is empty")
        remaining = group.size
        for i, seat in enumerate(self.seats):
            if remaining == 0:
                break
            if seat is not None and seat.client_id == group.client_id:
                self.seats[i] = None
                remaining -= 1
        return group
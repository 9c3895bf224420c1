"""Event handlers that start and finish each service in the restaurant.

Every ``start_*`` handler takes a group from a waiting queue, binds it to a
resource and schedules the event that ends the service. Every ``finish_*``
handler frees the resource and moves the group on to its next queue.
"""

from __future__ import annotations

import logging
from typing import MutableMapping, MutableSequence, Optional, Sequence

from .models import (
    Buffet,
    Cashier,
    ClientQueue,
    Event,
    EventKind,
    GroupOfClients,
    Manager,
    Table,
    Waiter,
)

logger = logging.getLogger(__name__)

# How many seats more than the group size a table may have when seating.
MAX_SPARE_SEATS = 3


def start_buffet_service(
    events: MutableSequence[Event],
    buffet: Buffet,
    queue: ClientQueue,
    now: float,
) -> Optional[GroupOfClients]:
    """Seat the first group of the buffet queue, if it fits.

    Returns the seated group, or None when the buffet has no room for it.
    """
    group = queue.peek()
    if not buffet.sit_in(group):
        return None
    logger.info(
        "Buffet client %d (group of %d) sat at the buffet at time %s.",
        group.client_id, group.size, now,
    )
    end = group.time_buffet + now
    group.time_buffet = end
    events.append(Event(EventKind.BUFFET_END, end))
    queue.pop()
    return group


def finish_buffet_service(
    buffet: Buffet,
    cashier_queue: ClientQueue,
    now: float,
    position: int,
) -> GroupOfClients:
    """Free the buffet seats of the group at position and queue it for a cashier."""
    group = buffet.sit_out(position)
    cashier_queue.push(group)
    logger.info(
        "Client %d (group of %d) left the buffet and queued for the cashiers at time %s.",
        group.client_id, group.size, now,
    )
    return group


def start_cashier_service(
    events: MutableSequence[Event],
    cashier_queue: ClientQueue,
    cashiers: Sequence[Cashier],
    index: int,
    now: float,
) -> GroupOfClients:
    """Hand the first group of the cashier queue to the cashier at index."""
    group = cashier_queue.peek()
    cashiers[index].assign(group)
    cashier_queue.pop()
    logger.info(
        "Client %d (group of %d) started service at the cashiers at time %s.",
        group.client_id, group.size, now,
    )
    end = group.time_cashier + now
    group.time_cashier = end
    events.append(Event(EventKind.CASHIER_END, end))
    return group


def finish_cashier_service(
    cashiers: Sequence[Cashier],
    now: float,
    index: int,
    alarm_sensitive: MutableSequence[GroupOfClients],
) -> GroupOfClients:
    """Release the cashier at index; its group leaves the restaurant.

    The group is also dropped from the list of alarm-sensitive groups.
    """
    cashier = cashiers[index]
    group = cashier.group
    if group is None:
        raise ValueError(f"cashier {index} is not serving anyone")
    cashier.release()
    logger.info(
        "Client %d (group of %d) finished at the cashiers and left at time %s.",
        group.client_id, group.size, now,
    )
    alarm_sensitive[:] = [g for g in alarm_sensitive if g.client_id != group.client_id]
    return group


def start_manager_service(
    events: MutableSequence[Event],
    manager: Manager,
    tables: Sequence[Table],
    table_queue: ClientQueue,
    now: float,
) -> Optional[GroupOfClients]:
    """Let the manager lead the largest waiting group that fits a free table.

    Among groups of that size the one waiting longest is chosen and taken
    out of the queue. Returns the chosen group, or None.
    """
    largest_table = max((t.size for t in tables if t.is_free), default=0)
    largest_group = max(
        (g.size for g in table_queue if g.size <= largest_table), default=0
    )
    selected = next((g for g in table_queue if g.size == largest_group), None)
    if selected is None:
        return None
    kept = [g for g in table_queue if g is not selected]
    while len(table_queue):
        table_queue.pop()
    for g in kept:
        table_queue.push(g)
    if selected.size > largest_table:
        return None
    manager.busy = True
    manager.group = selected
    logger.info(
        "Client %d (group of %d) is led to a table by the manager at time %s.",
        selected.client_id, selected.size, now,
    )
    end = selected.time_manager + now
    selected.time_manager = end
    events.append(Event(EventKind.MANAGER_END, end))
    return selected


def _pick_table(tables: Sequence[Table], group_size: int) -> Optional[Table]:
    for spare in range(MAX_SPARE_SEATS + 1):
        for table in tables:
            if table.is_free and table.size == group_size + spare:
                return table
    return None


def finish_manager_service(
    manager: Manager,
    tables: Sequence[Table],
    drink_queue: ClientQueue,
    now: float,
    seated_at: MutableMapping[int, float],
) -> Optional[Table]:
    """Seat the manager's group at the tightest free table.

    On success the manager is freed, the group waits for a drink and the
    seating time is recorded under its id. Returns the table, or None.
    """
    group = manager.group
    if group is None:
        return None
    table = _pick_table(tables, group.size)
    if table is None:
        return None
    table.client = group
    logger.info(
        "Client %d (group of %d) sat at a %d-person table at time %s.",
        group.client_id, group.size, table.size, now,
    )
    manager.group = None
    manager.busy = False
    drink_queue.push(group)
    seated_at[group.client_id] = now
    return table


def _start_waiter(
    events: MutableSequence[Event],
    queue: ClientQueue,
    waiters: Sequence[Waiter],
    index: int,
    kind: EventKind,
    now: float,
) -> GroupOfClients:
    group = queue.pop()
    waiter = waiters[index]
    waiter.group = group
    if kind is EventKind.DRINK_SERVED:
        end = group.time_drink + now
        group.time_drink = end
    else:
        end = group.time_meal + now
        group.time_meal = end
    events.append(Event(kind, end, waiter=waiter))
    return group


def start_drink_service(
    events: MutableSequence[Event],
    drink_queue: ClientQueue,
    waiters: Sequence[Waiter],
    index: int,
    now: float,
) -> GroupOfClients:
    """Give the first group waiting for a drink to the waiter at index."""
    group = _start_waiter(events, drink_queue, waiters, index, EventKind.DRINK_SERVED, now)
    logger.info(
        "Client %d (group of %d) is served by a waiter at time %s and waits for a drink.",
        group.client_id, group.size, now,
    )
    return group


def _finish_waiter(waiter: Optional[Waiter], queue: ClientQueue) -> Optional[GroupOfClients]:
    if waiter is None or waiter.group is None or waiter.group.client_id <= 0:
        return None
    group = waiter.group
    queue.push(group)
    waiter.group = None
    return group


def finish_drink_service(
    waiter: Optional[Waiter],
    meal_queue: ClientQueue,
    now: float,
) -> Optional[GroupOfClients]:
    """Serve the drink; the waiter is freed and the group waits for its meal."""
    group = _finish_waiter(waiter, meal_queue)
    if group is not None:
        logger.info(
            "Client %d (group of %d) got a drink from the waiter at time %s.",
            group.client_id, group.size, now,
        )
    return group


def start_meal_service(
    events: MutableSequence[Event],
    meal_queue: ClientQueue,
    waiters: Sequence[Waiter],
    index: int,
    now: float,
) -> GroupOfClients:
    """Give the first group waiting for a meal to the waiter at index."""
    group = _start_waiter(events, meal_queue, waiters, index, EventKind.MEAL_SERVED, now)
    logger.info(
        "Client %d (group of %d) waits for the main course from a waiter at time %s.",
        group.client_id, group.size, now,
    )
    return group


def finish_meal_service(
    waiter: Optional[Waiter],
    consumption_queue: ClientQueue,
    now: float,
) -> Optional[GroupOfClients]:
    """Serve the meal; the waiter is freed and the group starts eating."""
    group = _finish_waiter(waiter, consumption_queue)
    if group is not None:
        logger.info(
            "Client %d (group of %d) got the main course at time %s.",
            group.client_id, group.size, now,
        )
    return group


def start_consumption(
    events: MutableSequence[Event],
    consumption_queue: ClientQueue,
    tables: Sequence[Table],
    now: float,
) -> Optional[Table]:
    """Take the first served group and schedule the end of its meal.

    Returns the group's table, or None when it no longer holds one.
    """
    group = consumption_queue.pop()
    table = next(
        (t for t in tables if t.client is not None and t.client.client_id == group.client_id),
        None,
    )
    if table is None:
        return None
    logger.info(
        "Client %d (group of %d) started eating at time %s.",
        group.client_id, group.size, now,
    )
    end = group.time_consumption + now
    group.time_consumption = end
    events.append(Event(EventKind.CONSUMPTION_END, end, table=table))
    return table


def finish_consumption(
    table: Optional[Table],
    cashier_queue: ClientQueue,
    now: float,
) -> Optional[GroupOfClients]:
    """Free the table; its group queues for the cashiers."""
    if table is None or table.client is None:
        return None
    group = table.client
    cashier_queue.push(group)
    logger.info(
        "Client %d (group of %d) finished eating and queued for the cashiers at time %s.",
        group.client_id, group.size, now,
    )
    table.client = None
    return group
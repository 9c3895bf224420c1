"""Fire alarms: their schedule and the evacuation of sensitive clients."""

from __future__ import annotations

import logging
import random
from typing import MutableSequence

from .models import ClientQueue, Event, EventKind, GroupOfClients
from .restaurant import Restaurant

logger = logging.getLogger(__name__)

DEFAULT_SEED = 3_300_000
DEFAULT_UNTIL = 500_000.0
ALARM_MEAN, ALARM_SIGMA = 4200.0, 50.0
FIRST_ALARM_BASE = 1.0


def schedule_alarms(
    events: MutableSequence[Event],
    until: float = DEFAULT_UNTIL,
    seed: int = DEFAULT_SEED,
) -> list[Event]:
    """Append every alarm that rings before ``until`` and return them.

    Intervals between alarms are normally distributed; the last alarm is the
    first one at or past ``until``.
    """
    gen = random.Random(seed)
    scheduled: list[Event] = []
    t = FIRST_ALARM_BASE
    while t < until:
        t = gen.normalvariate(ALARM_MEAN, ALARM_SIGMA) + t
        scheduled.append(Event(EventKind.ALARM, t))
    events.extend(scheduled)
    return scheduled


def sound_alarm(
    alarm_sensitive: MutableSequence[GroupOfClients],
    now: float,
    restaurant: Restaurant,
    drink_queue: ClientQueue,
    meal_queue: ClientQueue,
    consumption_queue: ClientQueue,
) -> list[GroupOfClients]:
    """Make every alarm-sensitive group leave the restaurant.

    The groups are removed from every seat, table, queue and member of staff
    they hold, and ``alarm_sensitive`` is emptied. Returns the groups that left.
    """
    evacuated = list(alarm_sensitive)
    queues = (
        restaurant.buffet_queue,
        restaurant.table_queue,
        restaurant.cashier_queue,
        drink_queue,
        meal_queue,
        consumption_queue,
    )
    for group in evacuated:
        gid = group.client_id
        logger.info(
            "Client %d (group of %d) left the restaurant because of the alarm at time %s.",
            gid, group.size, now,
        )
        seats = restaurant.buffet.seats
        for i, seat in enumerate(seats):
            if seat is not None and seat.client_id == gid:
                seats[i] = None
        for cashier in restaurant.cashiers:
            if cashier.group is not None and cashier.group.client_id == gid:
                cashier.release()
        for queue in queues:
            queue.remove_group(gid)
        manager = restaurant.manager
        if manager.group is not None and manager.group.client_id == gid:
            manager.group = None
            manager.busy = False
        for table in restaurant.tables:
            if table.client is not None and table.client.client_id == gid:
                table.client = None
        for waiter in restaurant.waiters:
            if waiter.group is not None and waiter.group.client_id == gid:
                waiter.group = None
    alarm_sensitive.clear()
    return evacuated
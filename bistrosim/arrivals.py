"""Arrival of new client groups at the restaurant."""

from __future__ import annotations

import random
from bisect import bisect_right
from typing import MutableMapping, MutableSequence, Optional

from .models import Event, EventKind, GroupOfClients
from .restaurant import Restaurant

import logging

logger = logging.getLogger(__name__)

DEFAULT_SEED = 2_000_000
MANAGER_TIME = 40.0

APPEAR_MEAN, APPEAR_SIGMA = 350.0, 50.0
BUFFET_MEAN, BUFFET_SIGMA = 2900.0, 80.0
CASHIER_MEAN = 2500.0
DRINK_MEAN = 2500.0
MEAL_MEAN = 2500.0
CONSUMPTION_MEAN = 2020.0

# Out of 100 draws: sizes 1, 2, 3 and 4 take 11, 33, 33 and 23 of them.
_SIZE_BOUNDS = (11, 44, 77)
# Out of 10 draws, the last 3 make a group sensitive to the alarm.
_ALARM_THRESHOLD = 7


def _group_size(draw: int) -> int:
    return bisect_right(_SIZE_BOUNDS, draw) + 1


class ClientGenerator:
    """Creates client groups and schedules the next arrival.

    ``rng`` decides the group size, alarm sensitivity and whether the group
    wants a table or the buffet. Service times come from a generator that is
    reseeded with ``seed`` for every group.
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: int = DEFAULT_SEED) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.seed = seed

    def _service_times(self) -> dict[str, float]:
        gen = random.Random(self.seed)
        return {
            "appear": abs(gen.normalvariate(APPEAR_MEAN, APPEAR_SIGMA)),
            "buffet": abs(gen.normalvariate(BUFFET_MEAN, BUFFET_SIGMA)),
            "cashier": abs(gen.expovariate(1 / CASHIER_MEAN)),
            "drink": abs(gen.expovariate(1 / DRINK_MEAN)),
            "meal": abs(gen.expovariate(1 / MEAL_MEAN)),
            "consumption": abs(gen.expovariate(1 / CONSUMPTION_MEAN)),
        }

    def generate(
        self,
        events: MutableSequence[Event],
        restaurant: Restaurant,
        client_id: int,
        now: float,
        alarm_sensitive: MutableSequence[GroupOfClients],
        table_arrivals: MutableMapping[int, float],
    ) -> GroupOfClients:
        """Create a group, put it in its queue and schedule the next arrival.

        Table guests have their arrival time recorded in ``table_arrivals``;
        alarm-sensitive groups are appended to ``alarm_sensitive``.
        """
        size = _group_size(self.rng.randrange(100))
        sensitive = self.rng.randrange(10) >= _ALARM_THRESHOLD
        times = self._service_times()
        wants_table = self.rng.randrange(2) == 1

        if wants_table:
            group = GroupOfClients(
                client_id,
                size,
                time_appear=times["appear"],
                time_manager=MANAGER_TIME,
                time_meal=times["meal"],
                time_drink=times["drink"],
                time_consumption=times["consumption"],
                time_cashier=times["cashier"],
                alarm_sensitive=sensitive,
            )
            restaurant.table_queue.push(group)
            logger.info(
                "Table client %d (group of %d) queued for a table at time %s.",
                client_id, size, now,
            )
            table_arrivals[client_id] = now
        else:
            group = GroupOfClients(
                client_id,
                size,
                time_appear=times["appear"],
                time_buffet=times["buffet"],
                time_cashier=times["cashier"],
                alarm_sensitive=sensitive,
            )
            restaurant.buffet_queue.push(group)
            logger.info(
                "Buffet client %d (group of %d) queued for the buffet at time %s.",
                client_id, size, now,
            )
        if sensitive:
            alarm_sensitive.append(group)

        next_arrival = times["appear"] + now
        group.time_appear = next_arrival
        events.append(Event(EventKind.ARRIVAL, next_arrival))
        return group
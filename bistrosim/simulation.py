"""The event loop of the restaurant simulation and its statistics."""

from __future__ import annotations

import argparse
import logging
import math
import random
import sys
from dataclasses import dataclass, field
from pathlib import Path
from statistics import fmean
from typing import Optional, Sequence, Union

from .alarm import schedule_alarms, sound_alarm
from .arrivals import ClientGenerator
from .models import ClientQueue, Event, EventKind, GroupOfClients
from .restaurant import Restaurant
from .services import (
    finish_buffet_service,
    finish_cashier_service,
    finish_consumption,
    finish_drink_service,
    finish_manager_service,
    finish_meal_service,
    start_buffet_service,
    start_cashier_service,
    start_consumption,
    start_drink_service,
    start_manager_service,
    start_meal_service,
)

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 500_000.0
START_TIME = 1.0

CLIENTS_IN_SYSTEM_FILE = "clients_in_system.txt"
CLIENTS_TIMES_FILE = "time_for_system_clients.txt"
TABLE_WAIT_FILE = "average_time_waiting_for_table.txt"
TABLE_QUEUE_FILE = "average_length_of_queue_to_table.txt"
WAITER_WAIT_FILE = "average_time_waiting_for_waiter_service.txt"
CASHIER_QUEUE_FILE = "average_length_queue_to_cashiers.txt"


def _format(value: Union[int, float]) -> str:
    if isinstance(value, int):
        return str(value)
    return format(value, "g")


def _mean(values: Sequence[float]) -> float:
    return fmean(values) if values else math.nan


def _wait_for_key() -> None:
    input("Press Enter to continue...")


@dataclass
class Statistics:
    """Samples collected while the simulation runs."""

    groups_in_system: list[int] = field(default_factory=list)
    times: list[float] = field(default_factory=list)
    table_wait: list[float] = field(default_factory=list)
    table_queue_lengths: list[int] = field(default_factory=list)
    waiter_wait: list[float] = field(default_factory=list)
    cashier_queue_lengths: list[int] = field(default_factory=list)
    clients_in_system: int = 0

    def write(self, directory: Union[str, Path]) -> list[Path]:
        """Write each series to its own file in directory, one value per line."""
        target = Path(directory)
        target.mkdir(parents=True, exist_ok=True)
        series = (
            (CLIENTS_IN_SYSTEM_FILE, self.groups_in_system),
            (CLIENTS_TIMES_FILE, self.times),
            (TABLE_WAIT_FILE, self.table_wait),
            (TABLE_QUEUE_FILE, self.table_queue_lengths),
            (WAITER_WAIT_FILE, self.waiter_wait),
            (CASHIER_QUEUE_FILE, self.cashier_queue_lengths),
        )
        written = []
        for name, values in series:
            path = target / name
            path.write_text("".join(f"{_format(v)}\n" for v in values))
            written.append(path)
        return written

    def summary(self) -> dict[str, float]:
        """Final count of groups and the means of the collected series.

        A mean of an empty series is NaN.
        """
        return {
            "clients_in_system": self.clients_in_system,
            "mean_table_wait": _mean(self.table_wait),
            "mean_table_queue_length": _mean(self.table_queue_lengths),
            "mean_waiter_wait": _mean(self.waiter_wait),
            "mean_cashier_queue_length": _mean(self.cashier_queue_lengths),
        }


class Simulation:
    """A discrete-event run of the restaurant model.

    In step mode ``pause`` is called after each timed event; it waits for
    Enter by default and may be replaced with any callable.
    """

    def __init__(
        self,
        duration: float = DEFAULT_DURATION,
        step_mode: bool = False,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.duration = float(duration)
        self.step_mode = step_mode
        self.rng = rng if rng is not None else random.Random()
        self.restaurant = Restaurant()
        self.generator = ClientGenerator(self.rng)
        self.events: list[Event] = []
        self.alarm_sensitive: list[GroupOfClients] = []
        self.drink_queue = ClientQueue()
        self.meal_queue = ClientQueue()
        self.consumption_queue = ClientQueue()
        self.table_arrivals: dict[int, float] = {}
        self.seated_at: dict[int, float] = {}
        self.stats = Statistics()
        self.now = START_TIME
        self.pause = _wait_for_key
        self._next_id = 1
        self._groups = 0
        self._finished = False

    def run(self) -> Statistics:
        """Run until the clock reaches the duration and return the statistics."""
        if self._finished:
            raise RuntimeError("the simulation has already been run")
        self._finished = True
        schedule_alarms(self.events, self.duration)
        self.events.append(Event(EventKind.ARRIVAL, START_TIME))

        while self.now < self.duration:
            self.stats.groups_in_system.append(self._groups)
            self.stats.times.append(self.now)
            event: Optional[Event] = None
            if self.events:
                self.events.sort(key=lambda e: e.time)
                event = self.events[0]
                self.now = event.time
                self._handle(event)
                if self.step_mode and self.now < self.duration:
                    self.pause()
            while self._start_services():
                pass
            if self.events:
                self.events.pop(0)

        self.stats.clients_in_system = self._groups
        return self.stats

    def _handle(self, event: Event) -> None:
        r = self.restaurant
        now = self.now
        kind = event.kind
        if kind is EventKind.ALARM:
            logger.info("The alarm rings at time %s.", now)
            self._groups -= len(self.alarm_sensitive)
            sound_alarm(
                self.alarm_sensitive, now, r,
                self.drink_queue, self.meal_queue, self.consumption_queue,
            )
        elif kind is EventKind.ARRIVAL:
            client_id = self._next_id
            self._next_id += 1
            self.generator.generate(
                self.events, r, client_id, now, self.alarm_sensitive, self.table_arrivals
            )
            self.stats.table_queue_lengths.append(len(r.table_queue))
            self._groups += 1
        elif kind is EventKind.BUFFET_END:
            for position, seat in enumerate(r.buffet.seats):
                if seat is not None and seat.time_buffet == now:
                    finish_buffet_service(r.buffet, r.cashier_queue, now, position)
        elif kind is EventKind.CASHIER_END:
            for index, cashier in enumerate(r.cashiers):
                if cashier.group is not None and cashier.group.time_cashier == now:
                    finish_cashier_service(r.cashiers, now, index, self.alarm_sensitive)
                    self._groups -= 1
        elif kind is EventKind.MANAGER_END:
            finish_manager_service(r.manager, r.tables, self.drink_queue, now, self.seated_at)
        elif kind is EventKind.DRINK_SERVED:
            finish_drink_service(event.waiter, self.meal_queue, now)
        elif kind is EventKind.MEAL_SERVED:
            finish_meal_service(event.waiter, self.consumption_queue, now)
        elif kind is EventKind.CONSUMPTION_END:
            finish_consumption(event.table, r.cashier_queue, now)

    def _start_services(self) -> bool:
        """Start every service whose condition holds; True if any started."""
        r = self.restaurant
        now = self.now
        started = False

        if len(r.buffet_queue) and r.buffet.free_places() >= r.buffet_queue.peek().size:
            start_buffet_service(self.events, r.buffet, r.buffet_queue, now)
            started = True

        cashier = r.free_cashier_index()
        if cashier is not None and len(r.cashier_queue):
            start_cashier_service(self.events, r.cashier_queue, r.cashiers, cashier, now)
            self.stats.cashier_queue_lengths.append(len(r.cashier_queue))
            started = True

        if not r.manager.busy and len(r.table_queue) and r.can_seat():
            group = start_manager_service(
                self.events, r.manager, r.tables, r.table_queue, now
            )
            if group is not None:
                arrived = self.table_arrivals.get(group.client_id)
                if arrived is not None:
                    self.stats.table_wait.append(now - arrived)
                started = True

        waiter = r.free_waiter_index()
        if len(self.drink_queue) and waiter is not None:
            group = start_drink_service(self.events, self.drink_queue, r.waiters, waiter, now)
            seated = self.seated_at.get(group.client_id)
            if seated is not None:
                self.stats.waiter_wait.append(now - seated)
            started = True

        waiter = r.free_waiter_index()
        if len(self.meal_queue) and waiter is not None:
            start_meal_service(self.events, self.meal_queue, r.waiters, waiter, now)
            started = True

        if len(self.consumption_queue):
            start_consumption(self.events, self.consumption_queue, r.tables, now)
            started = True

        return started


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bistrosim", description="Simulate a restaurant with tables and a buffet."
    )
    parser.add_argument("--mode", type=int, choices=(1, 2),
                        help="1: step by step, 2: continuous (asked for when left out)")
    parser.add_argument("--duration", type=float, default=DEFAULT_DURATION,
                        help="simulated time to run for")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for group sizes and kinds")
    parser.add_argument("--output", default=".", help="directory for the statistics files")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the simulation from the command line, write and print its statistics."""
    parser = _parser()
    args = parser.parse_args(argv)
    mode = args.mode
    if mode is None:
        answer = input("Choose mode: 1. step by step, 2. continuous\n")
        try:
            mode = int(answer.strip())
        except ValueError:
            parser.error(f"invalid mode: {answer!r}")

    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stdout)

    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    simulation = Simulation(args.duration, step_mode=(mode == 1), rng=rng)
    stats = simulation.run()
    stats.write(args.output)

    summary = stats.summary()
    print(f"Clients in system: {summary['clients_in_system']}")
    print(f"Mean wait for a table: {summary['mean_table_wait']:g}.")
    print(f"Mean length of the queue to the tables: {summary['mean_table_queue_length']:g}.")
    print(f"Mean wait for a waiter: {summary['mean_waiter_wait']:g}.")
    print(f"Mean length of the queue to the cashiers: {summary['mean_cashier_queue_length']:g}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
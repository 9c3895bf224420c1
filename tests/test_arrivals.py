import random

import pytest

from bistrosim.arrivals import ClientGenerator
from bistrosim.models import EventKind
from bistrosim.restaurant import Restaurant


class _ScriptedRng:
    def __init__(self, values):
        self._values = iter(values)

    def randrange(self, n):
        value = next(self._values)
        assert 0 <= value < n
        return value


def _generate(draws, client_id=1, now=10.0, seed=2000000):
    gen = ClientGenerator(_ScriptedRng(draws), seed)
    events, sensitive, arrivals = [], [], {}
    restaurant = Restaurant()
    group = gen.generate(events, restaurant, client_id, now, sensitive, arrivals)
    return group, events, restaurant, sensitive, arrivals


@pytest.mark.parametrize(
    "draw,size",
    [(0, 1), (10, 1), (11, 2), (43, 2), (44, 3), (76, 3), (77, 4), (99, 4)],
)
def test_group_size_distribution_bounds(draw, size):
    group, *_ = _generate([draw, 0, 0])
    assert group.size == size


def test_table_client_goes_to_table_queue():
    group, events, restaurant, sensitive, arrivals = _generate([50, 0, 1], client_id=5, now=12.5)
    assert list(restaurant.table_queue) == [group]
    assert len(restaurant.buffet_queue) == 0
    assert arrivals == {5: 12.5}
    assert group.time_manager == 40.0
    assert sensitive == []


def test_buffet_client_goes_to_buffet_queue():
    group, events, restaurant, sensitive, arrivals = _generate([50, 0, 0], client_id=3)
    assert list(restaurant.buffet_queue) == [group]
    assert len(restaurant.table_queue) == 0
    assert arrivals == {}
    assert group.time_buffet > 0


@pytest.mark.parametrize("draw,expected", [(0, False), (6, False), (7, True), (9, True)])
def test_alarm_sensitivity(draw, expected):
    group, _, _, sensitive, _ = _generate([0, draw, 1])
    assert group.alarm_sensitive is expected
    assert (sensitive == [group]) is expected


def test_next_arrival_event_scheduled():
    now = 100.0
    group, events, *_ = _generate([0, 0, 1], now=now)
    assert len(events) == 1
    assert events[0].kind is EventKind.ARRIVAL
    assert events[0].time == group.time_appear
    assert events[0].time > now


def test_service_times_repeat_for_every_group():
    gen = ClientGenerator(random.Random(1), 2000000)
    restaurant = Restaurant()
    events, sensitive, arrivals = [], [], {}
    first = gen.generate(events, restaurant, 1, 0.0, sensitive, arrivals)
    second = gen.generate(events, restaurant, 2, 0.0, sensitive, arrivals)
    assert first.time_cashier == second.time_cashier
    assert first.time_appear == second.time_appear
    assert events[0].time == events[1].time


def test_times_are_non_negative():
    gen = ClientGenerator(random.Random(7), 42)
    restaurant = Restaurant()
    events, sensitive, arrivals = [], [], {}
    for client_id in range(1, 30):
        group = gen.generate(events, restaurant, client_id, 0.0, sensitive, arrivals)
        assert min(group.time_cashier, group.time_drink, group.time_meal,
                   group.time_consumption, group.time_buffet) >= 0
    assert len(restaurant.table_queue) + len(restaurant.buffet_queue) == 29
    assert set(arrivals) == {g.client_id for g in restaurant.table_queue}
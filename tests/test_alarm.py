from bistrosim.alarm import schedule_alarms, sound_alarm
from bistrosim.models import ClientQueue, EventKind, GroupOfClients
from bistrosim.restaurant import Restaurant


def test_schedule_alarms_covers_horizon():
    events = []
    scheduled = schedule_alarms(events, 50000.0, 3300000)
    assert events == scheduled
    assert all(e.kind is EventKind.ALARM for e in scheduled)
    times = [e.time for e in scheduled]
    assert times == sorted(times)
    assert times[-1] >= 50000.0
    assert times[-2] < 50000.0
    assert times[0] > 1.0


def test_schedule_alarms_is_deterministic():
    a = [e.time for e in schedule_alarms([], 30000.0, 3300000)]
    b = [e.time for e in schedule_alarms([], 30000.0, 3300000)]
    assert a == b


def test_schedule_alarms_appends_to_existing():
    events = ["marker"]
    scheduled = schedule_alarms(events, 10000.0, 5)
    assert events[0] == "marker"
    assert len(events) == len(scheduled) + 1


def test_no_alarms_when_horizon_already_passed():
    events = []
    assert schedule_alarms(events, 1.0, 3300000) == []
    assert events == []


def _setup():
    restaurant = Restaurant()
    victim = GroupOfClients(1, 2, alarm_sensitive=True)
    other = GroupOfClients(2, 1)
    restaurant.buffet.seats[0] = victim
    restaurant.buffet.seats[1] = victim
    restaurant.buffet.seats[2] = other
    restaurant.cashiers[0].assign(victim)
    restaurant.cashiers[1].assign(other)
    for queue in (restaurant.buffet_queue, restaurant.table_queue, restaurant.cashier_queue):
        queue.push(victim)
        queue.push(other)
    restaurant.manager.group = victim
    restaurant.manager.busy = True
    restaurant.tables[0].client = victim
    restaurant.tables[1].client = other
    restaurant.waiters[0].group = victim
    restaurant.waiters[1].group = other
    extra = [ClientQueue() for _ in range(3)]
    for queue in extra:
        queue.push(other)
        queue.push(victim)
    return restaurant, victim, other, extra


def test_sound_alarm_evacuates_sensitive_groups():
    restaurant, victim, other, (drinks, meals, eating) = _setup()
    sensitive = [victim]
    left = sound_alarm(sensitive, 500.0, restaurant, drinks, meals, eating)
    assert left == [victim]
    assert sensitive == []
    assert restaurant.buffet.seats[:3] == [None, None, other]
    assert restaurant.buffet.busy_places == 1
    assert restaurant.cashiers[0].is_free()
    assert restaurant.cashiers[1].group is other
    for queue in (restaurant.buffet_queue, restaurant.table_queue,
                  restaurant.cashier_queue, drinks, meals, eating):
        assert list(queue) == [other]
    assert restaurant.manager.group is None
    assert restaurant.manager.busy is False
    assert restaurant.tables[0].client is None
    assert restaurant.tables[1].client is other
    assert restaurant.waiters[0].group is None
    assert restaurant.waiters[1].group is other


def test_sound_alarm_with_no_sensitive_groups_changes_nothing():
    restaurant, victim, other, (drinks, meals, eating) = _setup()
    assert sound_alarm([], 1.0, restaurant, drinks, meals, eating) == []
    assert restaurant.manager.group is victim
    assert restaurant.buffet.busy_places == 3
    assert len(restaurant.table_queue) == 2
    assert len(drinks) == 2
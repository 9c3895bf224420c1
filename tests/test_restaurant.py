from bistrosim.models import GroupOfClients
from bistrosim.restaurant import Restaurant


def test_layout():
    restaurant = Restaurant()
    sizes = [t.size for t in restaurant.tables]
    assert sizes.count(2) == 4
    assert sizes.count(3) == 14
    assert sizes.count(4) == 4
    assert len(restaurant.waiters) == 13
    assert len(restaurant.cashiers) == len(restaurant.waiters)
    assert restaurant.buffet.size == 20
    assert all(t.is_free for t in restaurant.tables)


def test_free_cashier_index():
    restaurant = Restaurant()
    assert restaurant.free_cashier_index() == 0
    restaurant.cashiers[0].assign(GroupOfClients(1, 2))
    assert restaurant.free_cashier_index() == 1
    for cashier in restaurant.cashiers:
        cashier.assign(GroupOfClients(1, 2))
    assert restaurant.free_cashier_index() is None


def test_free_waiter_index():
    restaurant = Restaurant()
    assert restaurant.free_waiter_index() == 0
    restaurant.waiters[0].group = GroupOfClients(1, 2)
    restaurant.waiters[1].group = GroupOfClients(2, 2)
    assert restaurant.free_waiter_index() == 2
    for waiter in restaurant.waiters:
        waiter.group = GroupOfClients(3, 1)
    assert restaurant.free_waiter_index() is None


def test_can_seat_empty_queue():
    assert not Restaurant().can_seat()


def test_can_seat_with_free_table():
    restaurant = Restaurant()
    restaurant.table_queue.push(GroupOfClients(1, 4))
    assert restaurant.can_seat()


def test_can_seat_group_too_large_for_free_tables():
    restaurant = Restaurant()
    for table in restaurant.tables:
        if table.size == 4:
            table.client = GroupOfClients(50, 4)
    restaurant.table_queue.push(GroupOfClients(1, 4))
    assert restaurant.largest_free_table() == 3
    assert not restaurant.can_seat()
    restaurant.table_queue.push(GroupOfClients(2, 3))
    assert restaurant.can_seat()


def test_can_seat_no_free_tables():
    restaurant = Restaurant()
    for i, table in enumerate(restaurant.tables):
        table.client = GroupOfClients(100 + i, table.size)
    restaurant.table_queue.push(GroupOfClients(1, 1))
    assert restaurant.largest_free_table() == 0
    assert not restaurant.can_seat()


def test_can_seat_leaves_queue_unchanged():
    restaurant = Restaurant()
    groups = [GroupOfClients(i, s) for i, s in ((1, 2), (2, 4), (3, 1))]
    for g in groups:
        restaurant.table_queue.push(g)
    restaurant.can_seat()
    assert list(restaurant.table_queue) == groups
import pytest

from dispatch.dispatcher import Dispatcher
from drivers.models import Driver
from drivers.policy import DriverPolicy
from drivers.roster import DRIVERS
from drivers.selection import filter_eligible_drivers, is_on_duty, select_first_available
from orders.models import OrderStatus
from realtime.notifier import ORDERS_CHANNEL
from realtime.ticker import ManualTicker


@pytest.fixture
def dispatcher(repository, notifier):
    return Dispatcher(repository, notifier, ticker=ManualTicker())


def test_oldest_pending_order_gets_first_driver(dispatcher, repository, make_order):
    older, newer = make_order(), make_order()
    # inserted newest first; created_at decides
    repository.create(newer)
    repository.create(older)

    assignments = dispatcher.run_cycle()

    assert assignments == [(older.id, "DRV001"), (newer.id, "DRV002")]
    assert repository.get(older.id).status == OrderStatus.ACCEPTED
    assert repository.get(newer.id).driver_name == "Amit Sharma"


def test_orders_wait_when_every_driver_is_busy(dispatcher, repository, make_order):
    orders = [repository.create(make_order()) for _ in range(5)]

    assert len(dispatcher.run_cycle()) == 4
    assert repository.get(orders[-1].id).status == OrderStatus.PENDING
    assert dispatcher.run_cycle() == []


def test_driver_is_free_again_after_completion(dispatcher, repository, make_order):
    first = repository.create(make_order())
    dispatcher.run_cycle()
    repository.update_status(first.id, OrderStatus.COMPLETED)

    second = repository.create(make_order())
    assert dispatcher.run_cycle() == [(second.id, "DRV001")]


def test_one_notification_per_cycle(dispatcher, repository, notifier, make_order):
    calls = []
    notifier.subscribe(ORDERS_CHANNEL, lambda: calls.append(1))
    repository.create(make_order())
    repository.create(make_order())

    dispatcher.run_cycle()
    dispatcher.run_cycle()  # nothing left to assign

    assert calls == [1]


def test_type_matching_is_opt_in(repository, notifier, make_order):
    order = repository.create(make_order(ambulance_type="neonatal"))
    dispatcher = Dispatcher(
        repository,
        notifier,
        policy=DriverPolicy(match_ambulance_type=True),
        ticker=ManualTicker(),
    )

    assert dispatcher.run_cycle() == [(order.id, "DRV004")]


def test_runs_on_its_own_clock(repository, notifier, make_order):
    clock = ManualTicker()
    order = repository.create(make_order())

    with Dispatcher(repository, notifier, ticker=clock):
        assert clock.interval_seconds == 3.0
        clock.advance(3.0)

    assert not clock.is_running
    assert repository.get(order.id).status == OrderStatus.ACCEPTED


def test_roster_availability_flag_and_duty(repository, make_order):
    off_shift = Driver.new("DRV900", "Off Shift", "+91 90000 00000", "basic", "DL-00", 28.6, 77.2, is_available=False)
    order = repository.create(make_order())
    repository.update_status(order.id, OrderStatus.ARRIVING, {"driver_id": "DRV001"})

    orders = repository.list()
    assert is_on_duty(DRIVERS[0], orders)
    assert not is_on_duty(DRIVERS[1], orders)

    eligible = filter_eligible_drivers([off_shift] + DRIVERS, orders)
    assert [driver.id for driver in eligible] == ["DRV002", "DRV003", "DRV004"]
    assert select_first_available(DRIVERS, orders, ambulance_type="icu") is None

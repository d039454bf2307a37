import random

import pytest

from dispatch.state_machines.order_state import accept_order, depart_to_hospital, mark_arrived, start_trip
from drivers.roster import get_driver
from orders.models import OrderStatus
from realtime.notifier import ORDERS_CHANNEL
from realtime.ticker import ManualTicker
from routing.eta_service import haversine_km
from tracking.policy import TrackingPolicy
from tracking.simulator import TrackingSimulator, format_countdown


@pytest.fixture
def order(repository, make_order):
    return repository.create(make_order())


@pytest.fixture
def tracking_clock():
    return ManualTicker()


@pytest.fixture
def simulator(order, repository, notifier, tracking_clock):
    return TrackingSimulator(order, repository, notifier, ticker=tracking_clock, rng=random.Random(3))


@pytest.mark.parametrize("seconds, expected", [
    (240, "4 mins"),
    (237, "4 mins"),
    (120, "2 mins"),
    (61, "2 mins"),
    (60, "60 secs"),
    (3, "3 secs"),
    (0, "Arrived"),
    (-3, "Arrived"),
])
def test_format_countdown(seconds, expected):
    assert format_countdown(seconds) == expected


def test_initial_state(simulator, order):
    snapshot = simulator.snapshot()

    assert snapshot.status == OrderStatus.ARRIVING
    assert snapshot.formatted_eta == "4 mins"
    assert snapshot.target == order.location.coordinates
    # start is inside the +/-0.01 degree box around the pickup
    assert abs(snapshot.position[0] - snapshot.target[0]) <= 0.01
    assert abs(snapshot.position[1] - snapshot.target[1]) <= 0.01


def test_each_tick_closes_fifteen_percent_of_the_gap(simulator):
    start = simulator.position
    target = simulator.target

    snapshot = simulator.tick()

    assert snapshot.position[0] == pytest.approx(start[0] + (target[0] - start[0]) * 0.15)
    assert snapshot.position[1] == pytest.approx(start[1] + (target[1] - start[1]) * 0.15)
    assert snapshot.distance_km == pytest.approx(haversine_km(snapshot.position, target))
    assert snapshot.formatted_distance == f"{snapshot.distance_km:.2f} km"


def test_distance_shrinks_monotonically_and_reaches_arrival(simulator):
    previous = simulator.distance_km
    for _ in range(40):
        snapshot = simulator.tick()
        assert snapshot.distance_km <= previous
        previous = snapshot.distance_km

    # 0.85 ** 40 of at most ~1.5 km is well under 50 m
    assert simulator.has_reached()


def test_countdown_reaches_arrived_after_eighty_ticks(simulator):
    for _ in range(79):
        simulator.tick()
    assert simulator.snapshot().formatted_eta == "3 secs"
    assert simulator.snapshot().status == OrderStatus.ARRIVING

    snapshot = simulator.tick()
    assert snapshot.countdown_seconds == 0
    assert snapshot.formatted_eta == "Arrived"
    assert snapshot.status == OrderStatus.ARRIVED


def test_countdown_does_not_write_to_the_repository(simulator, repository, order):
    for _ in range(80):
        simulator.tick()
    assert repository.get(order.id).status == OrderStatus.PENDING


def test_start_runs_on_its_own_clock(simulator, tracking_clock, notifier):
    with simulator:
        assert tracking_clock.is_running
        assert tracking_clock.interval_seconds == 2.0
        assert notifier.subscriber_count(ORDERS_CHANNEL) == 1

        tracking_clock.advance(6.0)
        assert simulator.countdown_seconds == 240 - 3 * 3

    assert not tracking_clock.is_running
    assert notifier.subscriber_count() == 0
    assert not notifier.is_polling


def test_stop_is_idempotent(simulator):
    simulator.start()
    simulator.stop()
    simulator.stop()
    assert simulator.snapshot().status == OrderStatus.ARRIVING


def test_stored_status_is_overlaid_on_notification(simulator, repository, notifier, order):
    driver = get_driver("DRV001")
    with simulator:
        accept_order(repository, order.id, driver)
        notifier.trigger_update(ORDERS_CHANNEL)
        assert simulator.snapshot().status == OrderStatus.ACCEPTED
        assert simulator.order.driver_name == "Rajesh Kumar"

        start_trip(repository, order.id)
        mark_arrived(repository, order.id)
        notifier.trigger_update(ORDERS_CHANNEL)
        assert simulator.snapshot().status == OrderStatus.ARRIVED


def test_overlay_falls_back_to_current_order_snapshot(repository, notifier, make_order):
    order = make_order()
    # only the hand-off snapshot exists, not the collection entry
    repository.save_current(order)
    simulator = TrackingSimulator(order, repository, notifier, ticker=ManualTicker(), rng=random.Random(0))

    simulator.on_orders_update()
    assert simulator.status == OrderStatus.PENDING


def test_ticker_failure_releases_subscription(order, repository, notifier):
    class BrokenTicker(ManualTicker):
        def start(self, callback, interval_seconds):
            raise RuntimeError("no clock")

    simulator = TrackingSimulator(order, repository, notifier, ticker=BrokenTicker())
    with pytest.raises(RuntimeError):
        simulator.start()
    assert notifier.subscriber_count() == 0


def test_policy_validation(order, repository, notifier):
    with pytest.raises(ValueError):
        TrackingSimulator(order, repository, notifier, policy=TrackingPolicy(convergence_factor=1.5))


def test_spent_countdown_is_not_undone_by_the_overlay(simulator, repository, order):
    for _ in range(80):
        simulator.tick()

    # the stored order is still pending
    simulator.on_orders_update()
    assert simulator.snapshot().status == OrderStatus.ARRIVED

    accept_order(repository, order.id, get_driver("DRV001"))
    simulator.on_orders_update()
    assert simulator.snapshot().status == OrderStatus.ARRIVED

    start_trip(repository, order.id)
    mark_arrived(repository, order.id)
    depart_to_hospital(repository, order.id)
    simulator.on_orders_update()
    assert simulator.snapshot().status == OrderStatus.IN_TRANSIT

    assert simulator.tick().status == OrderStatus.IN_TRANSIT

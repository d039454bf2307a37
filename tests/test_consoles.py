from datetime import date

import pytest

from consoles.admin import AdminConsole
from consoles.driver import DriverAction, DriverConsole
from dispatch.state_machines.order_state import (
    accept_order,
    complete_order,
    depart_to_hospital,
    mark_arrived,
    start_trip,
)
from drivers.roster import get_driver
from hospitals.models import Hospital
from hospitals.registry import HospitalRegistry
from orders.models import OrderStatus
from realtime.notifier import ORDERS_CHANNEL
from realtime.ticker import ManualTicker


@pytest.fixture
def driver():
    return get_driver("DRV001")


@pytest.fixture
def console(driver, repository, notifier):
    return DriverConsole(driver, repository, notifier, ticker=ManualTicker())


@pytest.fixture
def registry(store):
    directory = [Hospital(id="OSM_1", name="RML Hospital", address="New Delhi", lat=28.6257, lng=77.2042)]
    return HospitalRegistry(store, lookup=lambda lat, lng, radius_km: list(directory))


def test_driver_console_walks_an_order_to_completion(console, repository, notifier, make_order):
    order = repository.create(make_order())
    notified = []
    notifier.subscribe(ORDERS_CHANNEL, lambda: notified.append(1))

    with console:
        assert [o.id for o in console.pending_orders] == [order.id]

        accepted = console.accept_order(order.id)
        assert accepted.driver_id == "DRV001"
        assert console.pending_orders == []
        assert console.next_action() == DriverAction.START

        statuses = []
        for _ in range(4):
            statuses.append(console.perform(console.next_action()).status)

        assert statuses == [
            OrderStatus.ARRIVING,
            OrderStatus.ARRIVED,
            OrderStatus.IN_TRANSIT,
            OrderStatus.COMPLETED,
        ]
        assert console.current_order is None
        assert console.next_action() is None

    assert len(notified) == 5
    assert repository.get(order.id).completed_at is not None


def test_accepting_a_taken_order_returns_none(console, repository, make_order):
    order = repository.create(make_order())
    accept_order(repository, order.id, get_driver("DRV002"))

    assert console.accept_order(order.id) is None
    assert repository.get(order.id).driver_id == "DRV002"


def test_console_refreshes_on_notification(console, driver, repository, notifier, make_order):
    order = repository.create(make_order())
    with console:
        accept_order(repository, order.id, driver)
        assert console.current_order is None

        notifier.trigger_update(ORDERS_CHANNEL)
        assert console.current_order.id == order.id
        assert console.next_action() == DriverAction.START


def test_console_polls_on_its_own_clock(driver, repository, notifier, make_order):
    clock = ManualTicker()
    console = DriverConsole(driver, repository, notifier, ticker=clock)
    with console:
        repository.create(make_order())
        clock.advance(3.0)
        assert len(console.pending_orders) == 1
    assert not clock.is_running
    assert notifier.subscriber_count() == 0


def test_update_status_maps_to_transitions(console, driver, repository, make_order):
    order = repository.create(make_order())
    accept_order(repository, order.id, driver)
    console.load_orders()

    assert console.update_status(OrderStatus.PENDING) is None
    assert console.update_status(OrderStatus.ARRIVING).status == OrderStatus.ARRIVING

    # skipping a step is rejected and the console reloads
    assert console.update_status(OrderStatus.COMPLETED) is None
    assert console.current_order.status == OrderStatus.ARRIVING

    assert console.update_status(OrderStatus.CANCELLED).status == OrderStatus.CANCELLED
    assert console.current_order is None


def test_admin_statistics(repository, notifier, registry, make_order, driver):
    pending = repository.create(make_order())
    moving = repository.create(make_order())
    finished = repository.create(make_order())
    accept_order(repository, moving.id, driver)
    start_trip(repository, moving.id)
    repository.update_status(finished.id, OrderStatus.COMPLETED, {"driver_id": "DRV002"})

    admin = AdminConsole(repository, notifier, registry, ticker=ManualTicker())
    stats = admin.load_data(today=date(2024, 3, 1))

    assert stats.total_orders == 3
    # pending + arriving
    assert stats.active_orders == 2
    # no completed_at written by a raw status write
    assert stats.completed_today == 0
    assert stats.available_drivers == 4

    assert [order.id for order in admin.incoming_ambulances()] == [moving.id]
    assignments = dict((d.id, o) for d, o in admin.driver_assignments())
    assert assignments["DRV001"].id == moving.id
    assert assignments["DRV002"] is None
    assert pending.id not in [order.id for order in admin.incoming_ambulances()]


def test_completed_today_counts_local_date(repository, notifier, registry, make_order, driver):
    order = repository.create(make_order())
    accept_order(repository, order.id, driver)
    start_trip(repository, order.id)
    mark_arrived(repository, order.id)
    depart_to_hospital(repository, order.id)
    completed = complete_order(repository, order.id)

    admin = AdminConsole(repository, notifier, registry, ticker=ManualTicker())
    local_day = completed.completed_at.astimezone().date()

    assert admin.load_data(today=local_day).completed_today == 1
    assert admin.load_data(today=date(1999, 1, 1)).completed_today == 0


def test_admin_hospital_edits_survive_reload(repository, notifier, registry):
    admin = AdminConsole(repository, notifier, registry, ticker=ManualTicker())

    hospitals = admin.load_hospitals(28.6139, 77.2090)
    assert admin.selected_hospital.id == "OSM_1"

    admin.save_hospital_edit(hospitals[0], available_beds=7)
    admin.add_hospital("Field Clinic", 28.61, 77.2, now_ms=1709283600000)

    reloaded = admin.load_hospitals(28.6139, 77.2090)
    assert [hospital.id for hospital in reloaded] == ["OSM_1", "CUSTOM_1709283600000"]
    assert reloaded[0].available_beds == 7


def test_admin_refreshes_on_notification(repository, notifier, registry, make_order):
    admin = AdminConsole(repository, notifier, registry, ticker=ManualTicker())
    with admin:
        assert admin.stats.total_orders == 0
        repository.create(make_order())
        notifier.trigger_update(ORDERS_CHANNEL)
        assert admin.stats.total_orders == 1
    assert notifier.subscriber_count() == 0

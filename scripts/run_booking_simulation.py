import logging
import random

import config
from booking.flow import BookingFlow
from consoles.admin import AdminConsole
from consoles.driver import DriverConsole, DriverAction
from dispatch.dispatcher import Dispatcher
from drivers.roster import get_driver
from hospitals.registry import HospitalRegistry
from orders.repository import OrderRepository
from realtime.notifier import PollingNotifier
from realtime.ticker import ManualTicker
from routing.eta_service import estimate_eta
from storage.backends import JsonFileStore
from tracking.simulator import TrackingSimulator


SIMULATION_STORAGE_PATH = ".simulation_storage.json"


def run_simulation(storage_path: str = SIMULATION_STORAGE_PATH, seed: int = 7):
    print("=== STARTING END-TO-END BOOKING SIMULATION ===")

    # 1. Composition root: one store, one notifier, one clock per component
    store = JsonFileStore(storage_path)
    # start from an empty board so older pending orders do not take the drivers
    store.reset()
    repository = OrderRepository(store)
    notifier_clock = ManualTicker()
    notifier = PollingNotifier(ticker=notifier_clock)
    rng = random.Random(seed)

    # 2. Customer books an ICU ambulance
    flow = BookingFlow(repository, notifier, rng=rng)
    flow.set_location(28.6139, 77.2090, "Connaught Place, New Delhi")
    flow.confirm_location()
    flow.update_patient(name="Asha Verma", age="54", phone="9876543210", emergency_type="cardiac")
    flow.select_ambulance("icu")
    order = flow.confirm()
    if order is None:
        print(f"Booking blocked: {flow.validation_errors}")
        return
    print(f"Booked {order.id} ({order.ambulance_type}) at {order.location.address}")

    # 3. Customer opens tracking, admin opens the console
    tracking_clock = ManualTicker()
    tracker = TrackingSimulator(order, repository, notifier, ticker=tracking_clock, rng=rng)
    admin = AdminConsole(repository, notifier, HospitalRegistry(store), ticker=ManualTicker())

    with tracker, admin:
        # 4. Simulated assignment picks the first free driver
        dispatcher = Dispatcher(repository, notifier, ticker=ManualTicker())
        assignments = dispatcher.run_cycle()
        for order_id, driver_id in assignments:
            print(f"[ASSIGNED] {order_id} -> {driver_id}")

        assigned = repository.get(order.id)
        driver = get_driver(assigned.driver_id)
        eta = estimate_eta(driver.location, order.location.coordinates)
        print(f"Driver {driver.name} is {eta.formatted_distance} away (~{eta.formatted_eta})")

        console = DriverConsole(driver, repository, notifier, ticker=ManualTicker())
        with console:
            console.perform(DriverAction.START)

            # 5. Let the tracking clock run while the ambulance approaches
            for _ in range(10):
                tracking_clock.advance(tracker.policy.tick_seconds)
                notifier_clock.advance(notifier.policy.poll_interval_seconds)
                snap = tracker.snapshot()
                print(
                    f"  pos=({snap.position[0]:.4f}, {snap.position[1]:.4f}) "
                    f"distance={snap.formatted_distance} eta={snap.formatted_eta} status={snap.status.value}"
                )

            # 6. Crew walks the order to completion
            for action in (DriverAction.ARRIVE, DriverAction.DEPART, DriverAction.COMPLETE):
                updated = console.perform(action)
                print(f"[{action.value.upper()}] {order.id} -> {updated.status.value}")

        stats = admin.load_data()
        print(
            f"\nAdmin: total={stats.total_orders} active={stats.active_orders} "
            f"completed_today={stats.completed_today} available_drivers={stats.available_drivers}"
        )

    notifier.close()
    print("\n=== SIMULATION COMPLETE ===")
    print(f"State written to '{storage_path}'.")


if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL)
    run_simulation()

import logging

import numpy as np

import config
from orders.ambulance_types import AMBULANCE_TYPES
from orders.models import Location, Order, PatientInfo
from orders.repository import OrderRepository
from storage.backends import JsonFileStore

EMERGENCY_TYPES = ["cardiac", "road_accident", "stroke", "respiratory", "trauma", "burns"]
FIRST_NAMES = ["Asha", "Ravi", "Meera", "Karan", "Sunita", "Arjun", "Neha", "Vikas"]


def generate_mock_orders(num_orders=25, storage_path=config.STORAGE_PATH, seed=None):
    """
    Seeds pending orders scattered around the default city centre so the
    driver and admin consoles have something to show.
    """
    rng = np.random.default_rng(seed)
    repository = OrderRepository(JsonFileStore(storage_path))
    ambulance_ids = [ambulance.id for ambulance in AMBULANCE_TYPES]

    for order_index in range(num_orders):
        # pickups within ~5km of the centre (roughly 0.05 degrees)
        lat = config.DEFAULT_LAT + rng.uniform(-0.05, 0.05)
        lng = config.DEFAULT_LNG + rng.uniform(-0.05, 0.05)

        name = f"{rng.choice(FIRST_NAMES)} Patient{order_index + 1}"
        phone = str(rng.integers(6, 10)) + "".join(str(d) for d in rng.integers(0, 10, size=9))
        emergency_type = str(rng.choice(EMERGENCY_TYPES))

        order = Order.new(
            customer_id="guest",
            customer_name=name,
            customer_phone=phone,
            location=Location(round(float(lat), 6), round(float(lng), 6), f"Mock pickup {order_index + 1}"),
            ambulance_type=str(rng.choice(ambulance_ids, p=[0.4, 0.3, 0.15, 0.1, 0.05])),
            patient_info=PatientInfo(
                name=name,
                age=str(int(rng.integers(1, 90))),
                emergency_type=emergency_type,
                phone=phone,
                is_conscious=bool(rng.random() < 0.8),
                is_breathing=bool(rng.random() < 0.95),
                number_of_patients="1",
            ),
            is_emergency=emergency_type == "road_accident",
        )
        repository.create(order)

    print(f"✅ Generated {num_orders} pending orders into '{storage_path}'")


if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL)
    generate_mock_orders()

import random
from datetime import datetime, timedelta, timezone

import pytest

from orders.models import Location, Order, PatientInfo
from orders.repository import OrderRepository
from realtime.notifier import PollingNotifier
from realtime.ticker import ManualTicker
from storage.backends import InMemoryStore

# Connaught Place, New Delhi
PICKUP = (28.6139, 77.2090)
BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def repository(store):
    return OrderRepository(store)


@pytest.fixture
def clock():
    return ManualTicker()


@pytest.fixture
def notifier(clock):
    notifier = PollingNotifier(ticker=clock)
    yield notifier
    notifier.close()


@pytest.fixture
def make_order():
    """
    Builds pending orders with deterministic ids; each call is one minute
    younger than the previous one.
    """
    rng = random.Random(42)
    counter = {"n": 0}

    def _make(ambulance_type="icu", lat=PICKUP[0], lng=PICKUP[1], **overrides):
        created_at = BASE_TIME + timedelta(minutes=counter["n"])
        counter["n"] += 1
        order = Order.new(
            customer_id="guest",
            customer_name="Asha Verma",
            customer_phone="9876543210",
            location=Location(lat, lng, "Connaught Place"),
            ambulance_type=ambulance_type,
            patient_info=PatientInfo(name="Asha Verma", age="54", emergency_type="cardiac", phone="9876543210"),
            rng=rng,
            now=created_at,
        )
        for key, value in overrides.items():
            setattr(order, key, value)
        return order

    return _make

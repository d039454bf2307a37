import random

import pytest

from accounts.session import Session
from booking.flow import (
    QUICK_ORDER_PHONE_REQUIRED,
    VOICE_UNSUPPORTED,
    BookingFlow,
    BookingStep,
)
from booking.voice_commands import parse_transcript
from orders.models import OrderStatus
from realtime.notifier import ORDERS_CHANNEL


@pytest.fixture
def flow(repository, notifier):
    return BookingFlow(repository, notifier, rng=random.Random(11))


def _fill_patient(flow):
    flow.update_patient(name="Asha Verma", age="54", phone="9876543210", emergency_type="cardiac")


def test_happy_path_books_a_pending_order(flow, repository, notifier):
    notified = []
    notifier.subscribe(ORDERS_CHANNEL, lambda: notified.append(1))

    flow.set_location(28.6139, 77.2090, "Connaught Place, New Delhi")
    flow.confirm_location()
    assert flow.step == BookingStep.AMBULANCE

    assert flow.select_ambulance("icu")
    assert flow.step == BookingStep.CONFIRM

    _fill_patient(flow)
    order = flow.confirm()

    assert order is not None
    stored = repository.list()
    assert len(stored) == 1
    assert stored[0].id == order.id
    assert stored[0].status == OrderStatus.PENDING
    assert stored[0].ambulance_type == "icu"
    assert stored[0].location.coordinates == (28.6139, 77.2090)
    assert stored[0].customer_id == "guest"
    assert repository.get_current() == order
    assert notified == [1]


def test_confirm_is_blocked_by_invalid_patient(flow, repository):
    flow.select_ambulance("basic")

    assert flow.confirm() is None
    assert flow.validation_errors["name"] == "Patient name is required"
    assert repository.list() == []


def test_continue_to_confirm_gates_navigation(flow):
    flow.confirm_location()
    flow.update_patient(name="A")
    assert not flow.continue_to_confirm()
    assert flow.step == BookingStep.AMBULANCE

    _fill_patient(flow)
    assert flow.continue_to_confirm()
    assert flow.step == BookingStep.CONFIRM


def test_confirm_requires_an_ambulance_type(flow, repository):
    _fill_patient(flow)
    assert flow.confirm() is None
    assert "ambulanceType" in flow.validation_errors
    assert repository.list() == []


def test_unknown_ambulance_type_is_rejected(flow):
    assert not flow.select_ambulance("helicopter")
    assert flow.step == BookingStep.LOCATION
    assert flow.validation_errors["ambulanceType"] == "Select a valid ambulance type"


def test_phone_and_age_are_sanitized_as_typed(flow):
    flow.update_patient(phone="98765-43210")
    assert flow.patient.phone == "9876543210"
    assert "phone" not in flow.validation_errors

    # an eleventh digit is refused
    flow.update_patient(phone="98765432101")
    assert flow.patient.phone == "9876543210"

    flow.update_patient(phone="1234567890")
    assert flow.validation_errors["phone"] == "Enter valid 10-digit mobile number starting with 6-9"

    flow.update_patient(age="4a5b6c7")
    assert flow.patient.age == "456"
    assert flow.validation_errors["age"] == "Enter valid age (0-150)"


def test_road_accident_toggle(flow):
    flow.toggle_road_accident(True)
    assert flow.patient.emergency_type == "road_accident"
    assert flow.ambulance_type == "icu"

    flow.toggle_road_accident(False)
    assert flow.patient.emergency_type == ""
    assert flow.ambulance_type == ""


def test_road_accident_booking_is_flagged_emergency(flow):
    flow.toggle_road_accident(True)
    flow.update_patient(name="Ravi Kumar", age="30", phone="9123456789")

    order = flow.confirm()
    assert order.is_emergency
    assert order.patient_info.emergency_type == "road_accident"


def test_quick_order_needs_a_phone(flow, repository):
    assert flow.quick_order() is None
    assert flow.error_message == QUICK_ORDER_PHONE_REQUIRED
    assert repository.list() == []


def test_quick_order(flow, repository):
    flow.update_patient(phone="9123456789")

    order = flow.quick_order()

    assert flow.error_message is None
    assert order.ambulance_type == "icu"
    assert order.is_emergency
    assert order.patient_info.name == "Road Accident Victim"
    assert order.patient_info.emergency_type == "road_accident"
    assert repository.get(order.id).status == OrderStatus.PENDING


def test_logged_in_customer_identity(repository, notifier, store):
    Session(store).login("asha@example.com", "Asha Verma", "9876543210")
    flow = BookingFlow(repository, notifier, session=Session(store), rng=random.Random(5))
    _fill_patient(flow)
    flow.select_ambulance("critical")

    order = flow.confirm()
    assert order.customer_id == "asha@example.com"
    assert order.customer_name == "Asha Verma"


def test_voice_unavailable_disables_commands(flow):
    assert not flow.enable_voice(False)
    assert flow.voice_error == VOICE_UNSUPPORTED

    for command in parse_transcript("my name is rahul and age 45"):
        flow.apply_voice_command(command)
    assert flow.patient.name == ""


def test_voice_fills_form_and_books(flow, repository):
    assert flow.enable_voice(True)
    flow.confirm_location()

    for text in ("my name is rahul and age 45", "phone 9876543210 heart attack", "icu"):
        for command in parse_transcript(text):
            flow.apply_voice_command(command)

    assert flow.patient.name == "rahul"
    assert flow.patient.age == "45"
    assert flow.patient.phone == "9876543210"
    assert flow.patient.emergency_type == "cardiac"
    assert flow.ambulance_type == "icu"
    assert flow.step == BookingStep.CONFIRM

    booked = [flow.apply_voice_command(command) for command in parse_transcript("confirm")]
    order = next(order for order in booked if order is not None)
    assert repository.get(order.id).ambulance_type == "icu"

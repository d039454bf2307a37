"""
Purpose: The booking wizard (location -> ambulance -> confirm).
What it does:
- Holds the in-progress form state: pickup location, ambulance type, patient info
- Gates forward navigation on patient validation
- On confirm: creates a pending Order, stores it, hands it to tracking via the
  currentOrder snapshot and notifies open panels
- Road-accident shortcut and one-tap emergency booking
- Applies parsed voice commands to the form

Rule: The flow writes orders; it never changes their status after creation.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from enum import Enum
from typing import Dict, Optional, Tuple

import config
from accounts.session import Session
from orders.ambulance_types import is_known_ambulance_type
from orders.models import Destination, Location, Order, PatientInfo
from orders.repository import OrderRepository
from realtime.notifier import Notifier, ORDERS_CHANNEL
from .validation import validate_age, validate_patient_info, validate_phone, sanitize_numeric_input
from .voice_commands import VoiceCommand, COMMAND_FIELD, BOOK, CANCEL, EMERGENCY

logger = logging.getLogger(__name__)

ROAD_ACCIDENT = "road_accident"
EMERGENCY_AMBULANCE = "icu"
ROAD_ACCIDENT_VICTIM = "Road Accident Victim"
GUEST_CUSTOMER_ID = "guest"

QUICK_ORDER_PHONE_REQUIRED = "Please enter at least a phone number for emergency contact"
VOICE_UNSUPPORTED = "Your browser doesn't support speech recognition. Try Chrome or Edge."


class BookingStep(str, Enum):
    LOCATION = "location"
    AMBULANCE = "ambulance"
    CONFIRM = "confirm"


def _default_patient() -> PatientInfo:
    return PatientInfo(is_conscious=True, is_breathing=True, number_of_patients="1")


class BookingFlow:

    def __init__(
        self,
        repository: OrderRepository,
        notifier: Notifier,
        session: Optional[Session] = None,
        rng: Optional[random.Random] = None,
    ):
        self.repository = repository
        self.notifier = notifier
        self.session = session
        self._rng = rng

        self.step = BookingStep.LOCATION
        self.location = Location(config.DEFAULT_LAT, config.DEFAULT_LNG, "")
        self.destination: Optional[Destination] = None
        self.ambulance_type = ""
        self.patient = _default_patient()
        self.is_road_accident = False
        self.validation_errors: Dict[str, str] = {}
        self.error_message: Optional[str] = None

        self.voice_enabled = False
        self.voice_error: Optional[str] = None

    # --- wizard steps ---

    def set_location(self, lat: float, lng: float, address: str = "Current Location") -> None:
        self.location = Location(lat, lng, address)

    def set_destination(self, lat: float, lng: float, address: str, hospital_name: str) -> None:
        self.destination = Destination(lat, lng, address, hospital_name)

    def confirm_location(self) -> None:
        self.step = BookingStep.AMBULANCE

    def select_ambulance(self, type_id: str) -> bool:
        if not is_known_ambulance_type(type_id):
            self.validation_errors["ambulanceType"] = "Select a valid ambulance type"
            return False
        self.validation_errors.pop("ambulanceType", None)
        self.ambulance_type = type_id
        self.step = BookingStep.CONFIRM
        return True

    def back_to_ambulance(self) -> None:
        self.step = BookingStep.AMBULANCE

    # --- patient form ---

    def update_patient(self, **changes) -> None:
        """
        Apply form edits. Phone and age are sanitized to digits as typed and
        checked live, the way the form fields behave.
        """
        if "phone" in changes:
            phone = sanitize_numeric_input(changes["phone"] or "")
            if len(phone) > 10:
                # input refuses the extra digit
                phone = self.patient.phone
            changes["phone"] = phone
            if len(phone) == 10:
                self._record_check("phone", validate_phone(phone))

        if "age" in changes:
            age = sanitize_numeric_input(changes["age"] or "")[:3]
            changes["age"] = age
            if age:
                self._record_check("age", validate_age(age))

        if "emergency_contact" in changes:
            contact = sanitize_numeric_input(changes["emergency_contact"] or "")
            changes["emergency_contact"] = contact if len(contact) <= 10 else self.patient.emergency_contact

        self.patient = replace(self.patient, **changes)

    def _record_check(self, field_name: str, check) -> None:
        if check.is_valid:
            self.validation_errors.pop(field_name, None)
        else:
            self.validation_errors[field_name] = check.error

    def toggle_road_accident(self, checked: bool) -> None:
        self.is_road_accident = checked
        if checked:
            self.patient = replace(self.patient, emergency_type=ROAD_ACCIDENT)
            self.ambulance_type = EMERGENCY_AMBULANCE
        else:
            self.patient = replace(self.patient, emergency_type="")
            self.ambulance_type = ""

    def validate(self) -> bool:
        result = validate_patient_info(
            name=self.patient.name,
            phone=self.patient.phone,
            age=self.patient.age,
            emergency_type=self.patient.emergency_type,
        )
        self.validation_errors = dict(result.errors)
        return result.is_valid

    def continue_to_confirm(self) -> bool:
        if not self.validate():
            return False
        self.step = BookingStep.CONFIRM
        return True

    # --- submit ---

    def _customer(self, fallback_name: str) -> Tuple[str, str]:
        user = self.session.current_user() if self.session else None
        customer_id = (user.email if user else "") or GUEST_CUSTOMER_ID
        customer_name = (user.name if user else "") or fallback_name
        return customer_id, customer_name

    def _submit(self, order: Order) -> Order:
        self.repository.create(order)
        self.repository.save_current(order)
        self.notifier.trigger_update(ORDERS_CHANNEL)
        logger.info("Booked order %s (%s, emergency=%s)", order.id, order.ambulance_type, order.is_emergency)
        return order

    def confirm(self) -> Optional[Order]:
        """
        Create the pending order. Returns None (with validation_errors filled)
        while the form is incomplete.
        """
        if not self.validate():
            return None
        if not self.ambulance_type:
            self.validation_errors["ambulanceType"] = "Select an ambulance type"
            return None

        customer_id, customer_name = self._customer(self.patient.name)
        order = Order.new(
            customer_id=customer_id,
            customer_name=customer_name,
            customer_phone=self.patient.phone,
            location=Location(self.location.lat, self.location.lng, self.location.address or "Current Location"),
            destination=self.destination,
            ambulance_type=self.ambulance_type,
            patient_info=self.patient,
            is_emergency=self.is_road_accident,
            rng=self._rng,
        )
        return self._submit(order)

    def quick_order(self) -> Optional[Order]:
        """One-tap road accident booking: only a phone number is required."""
        if not self.patient.phone:
            self.error_message = QUICK_ORDER_PHONE_REQUIRED
            return None
        self.error_message = None

        customer_id, customer_name = self._customer(self.patient.name or ROAD_ACCIDENT_VICTIM)
        patient = replace(
            self.patient,
            name=self.patient.name or ROAD_ACCIDENT_VICTIM,
            emergency_type=ROAD_ACCIDENT,
        )
        order = Order.new(
            customer_id=customer_id,
            customer_name=customer_name,
            customer_phone=self.patient.phone,
            location=Location(self.location.lat, self.location.lng, self.location.address or "Current Location"),
            ambulance_type=EMERGENCY_AMBULANCE,
            patient_info=patient,
            is_emergency=True,
            rng=self._rng,
        )
        return self._submit(order)

    # --- voice ---

    def enable_voice(self, capability_available: bool, reason: Optional[str] = None) -> bool:
        """
        Checked once when the form opens. Without the capability voice stays
        disabled with a message; there is no retry loop.
        """
        if not capability_available:
            self.voice_enabled = False
            self.voice_error = reason or VOICE_UNSUPPORTED
            logger.info("Voice input disabled: %s", self.voice_error)
            return False
        self.voice_enabled = True
        self.voice_error = None
        return True

    def apply_voice_command(self, command: VoiceCommand) -> Optional[Order]:
        """Returns the booked order when the command confirmed the booking."""
        if not self.voice_enabled:
            return None

        if command.field == COMMAND_FIELD:
            if command.value == EMERGENCY:
                self.is_road_accident = True
                self.step = BookingStep.LOCATION
                self.patient = replace(self.patient, emergency_type=ROAD_ACCIDENT)
            elif command.value == BOOK and self.step == BookingStep.CONFIRM:
                return self.confirm()
            elif command.value == CANCEL:
                self.voice_enabled = False
            return None

        if command.field == "name":
            self.patient = replace(self.patient, name=command.value)
        elif command.field == "age":
            self.patient = replace(self.patient, age=command.value)
        elif command.field == "phone":
            self.patient = replace(self.patient, phone=command.value)
        elif command.field == "gender":
            self.patient = replace(self.patient, gender=command.value)
        elif command.field == "bloodGroup":
            self.patient = replace(self.patient, blood_group=command.value)
        elif command.field == "emergencyType":
            self.patient = replace(self.patient, emergency_type=command.value)
        elif command.field == "ambulanceType":
            self.ambulance_type = command.value
            if self.step == BookingStep.AMBULANCE:
                self.step = BookingStep.CONFIRM
        elif command.field == "location":
            self.location = replace(self.location, address=command.value)
        return None

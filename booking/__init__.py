"""
Booking package: the customer-facing booking wizard.

Public API:
- BookingFlow, BookingStep
- validate_patient_info, validate_phone, validate_age, sanitize_numeric_input, ValidationResult
- parse_transcript, VoiceCommand
"""
from .validation import (
    ValidationResult,
    FieldCheck,
    validate_patient_info,
    validate_phone,
    validate_age,
    sanitize_numeric_input,
)
from .voice_commands import VoiceCommand, parse_transcript
from .flow import BookingFlow, BookingStep

__all__ = [
    "ValidationResult",
    "FieldCheck",
    "validate_patient_info",
    "validate_phone",
    "validate_age",
    "sanitize_numeric_input",
    "VoiceCommand",
    "parse_transcript",
    "BookingFlow",
    "BookingStep",
]

"""
Patient form checks. Nothing here raises: every check returns a structured
result the booking flow shows next to the field.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Optional

NAME_PATTERN = re.compile(r"[a-zA-Z\s]+")
# 10-digit Indian mobile number starting 6-9
MOBILE_PATTERN = re.compile(r"[6-9][0-9]{9}")
MIN_AGE = 0
MAX_AGE = 150


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FieldCheck:
    is_valid: bool
    error: Optional[str] = None


def _strip_whitespace(value: str) -> str:
    return re.sub(r"\s", "", value)


def _leading_int(value: str) -> Optional[int]:
    # parseInt semantics: leading sign and digits, rest ignored
    match = re.match(r"\s*([+-]?[0-9]+)", value)
    return int(match.group(1)) if match else None


def _age_in_range(age: str) -> bool:
    parsed = _leading_int(age)
    return parsed is not None and MIN_AGE <= parsed <= MAX_AGE


def validate_patient_info(name: str, phone: str, age: str, emergency_type: str) -> ValidationResult:
    errors: Dict[str, str] = {}

    if not name or not name.strip():
        errors["name"] = "Patient name is required"
    elif len(name.strip()) < 2:
        errors["name"] = "Name must be at least 2 characters"
    elif not NAME_PATTERN.fullmatch(name):
        errors["name"] = "Name can only contain letters and spaces"

    if not phone or not phone.strip():
        errors["phone"] = "Phone number is required"
    elif not MOBILE_PATTERN.fullmatch(_strip_whitespace(phone)):
        errors["phone"] = "Enter a valid 10-digit Indian mobile number"

    if not age or not age.strip():
        errors["age"] = "Age is required"
    elif not _age_in_range(age):
        errors["age"] = "Enter a valid age between 0-150"

    if not emergency_type or not emergency_type.strip():
        errors["emergencyType"] = "Emergency type is required"

    return ValidationResult(is_valid=not errors, errors=errors)


def validate_phone(phone: str) -> FieldCheck:
    if not phone or not phone.strip():
        return FieldCheck(False, "Phone number is required")

    if not MOBILE_PATTERN.fullmatch(_strip_whitespace(phone)):
        return FieldCheck(False, "Enter valid 10-digit mobile number starting with 6-9")

    return FieldCheck(True)


def validate_age(age: str) -> FieldCheck:
    if not age or not age.strip():
        return FieldCheck(False, "Age is required")

    if not _age_in_range(age):
        return FieldCheck(False, "Enter valid age (0-150)")

    return FieldCheck(True)


def sanitize_numeric_input(value: str) -> str:
    return re.sub(r"[^0-9]", "", value)

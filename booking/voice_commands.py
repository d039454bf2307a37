"""
Purpose: Turn a speech transcript into booking form commands.
What it does:
Keyword / regex extraction over the lower-cased transcript. One transcript can
yield several commands (e.g. name + age + phone). Speech capture itself is
outside this package; it only receives the final text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

NAME_RE = re.compile(r"(?:my name is|name is|called)\s+([a-z\s]+?)(?:\s|$|and|my|age|emergency)")
AGE_RE = re.compile(r"(?:age|aged|years old|year old)[:\s]+([0-9]+)")
PHONE_RE = re.compile(r"[0-9]{10}")
BLOOD_GROUP_RE = re.compile(r"blood\s+group\s+(?:is\s+)?([abo][+-])")
LOCATION_RE = re.compile(r"(?:location|address|place)[:\s]+(.+?)(?:\s|$)")

# first keyword found wins, in this order
EMERGENCY_KEYWORDS = {
    "heart attack": "cardiac",
    "cardiac": "cardiac",
    "road accident": "road_accident",
    "accident": "road_accident",
    "stroke": "stroke",
    "breathing": "respiratory",
    "breathing problem": "respiratory",
    "pregnancy": "pregnancy",
    "trauma": "trauma",
    "injury": "trauma",
    "burn": "burns",
    "poisoning": "poisoning",
    "unconscious": "unconscious",
}

COMMAND_FIELD = "command"
BOOK = "book"
CANCEL = "cancel"
EMERGENCY = "emergency"


@dataclass(frozen=True)
class VoiceCommand:
    field: str
    value: str
    confidence: float


def parse_transcript(text: str, confidence: float = 1.0) -> List[VoiceCommand]:
    lower = text.lower()
    commands: List[VoiceCommand] = []

    def emit(field: str, value: str, score: float = confidence) -> None:
        commands.append(VoiceCommand(field, value, score))

    if "name is" in lower or "called" in lower:
        match = NAME_RE.search(lower)
        if match:
            emit("name", match.group(1).strip())

    if "age" in lower or "years old" in lower or "year old" in lower:
        match = AGE_RE.search(lower)
        if match:
            emit("age", match.group(1))

    match = PHONE_RE.search(lower)
    if match:
        emit("phone", match.group(0))

    if "female" in lower:
        emit("gender", "female")
    elif "male" in lower:
        emit("gender", "male")

    match = BLOOD_GROUP_RE.search(lower)
    if match:
        emit("bloodGroup", match.group(1).upper())

    for keyword, emergency_type in EMERGENCY_KEYWORDS.items():
        if keyword in lower:
            emit("emergencyType", emergency_type)
            break

    if "location" in lower or "address" in lower or "place" in lower:
        match = LOCATION_RE.search(lower)
        if match:
            emit("location", match.group(1).strip())

    if "icu" in lower or "intensive care" in lower:
        emit("ambulanceType", "icu")
    elif "basic" in lower:
        emit("ambulanceType", "basic")
    elif "critical" in lower:
        emit("ambulanceType", "critical")

    if "book ambulance" in lower or "confirm" in lower or "book now" in lower:
        emit(COMMAND_FIELD, BOOK)

    if "cancel" in lower or "stop" in lower:
        emit(COMMAND_FIELD, CANCEL)

    if "help" in lower or "ambulance" in lower or "emergency" in lower:
        emit(COMMAND_FIELD, EMERGENCY, 1.0)

    return commands

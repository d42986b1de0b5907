import math
import re
from typing import Optional

from models.emergency import Severity

PEOPLE_PER_VOLUNTEER = 5

HIGH_SEVERITY_TYPES = ("medical", "fire", "accident")
MEDIUM_SEVERITY_TYPES = ("flood", "earthquake")


def normalize_phone(phone: Optional[str]) -> str:
    """Strip everything but digits: "(555) 123-4567" -> "5551234567"."""
    return re.sub(r"\D", "", phone or "")


def volunteers_needed(people_count: int) -> int:
    return max(1, math.ceil(people_count / PEOPLE_PER_VOLUNTEER))


def classify_severity(emergency_type: str, severity: Optional[str] = None) -> str:
    if severity:
        return Severity(severity).value
    kind = (emergency_type or "").strip().lower()
    if kind in HIGH_SEVERITY_TYPES:
        return Severity.HIGH.value
    if kind in MEDIUM_SEVERITY_TYPES:
        return Severity.MEDIUM.value
    return Severity.LOW.value


def construct_alert_message(emergency_type: str, zone: Optional[str], description: str, people_count: int) -> str:
    summary = description[:50] + ("..." if len(description) > 50 else "")
    return (
        f"🚨 NEW {emergency_type.upper()} EMERGENCY in {zone or 'your area'}: "
        f"{summary} - {people_count} people affected. Click to accept."
    )


def construct_guest_assignment_message(volunteer_name: str, emergency_type: str) -> str:
    return f"Volunteer {volunteer_name} has accepted your {emergency_type} request and is on the way."


def construct_volunteer_confirmation_message(emergency_type: str, address: Optional[str]) -> str:
    return f"You accepted a {emergency_type} request at {address or 'the reported location'}. Contact the requester as soon as possible."


def construct_completion_message(volunteer_name: str, emergency_type: str, people_served: int) -> str:
    return f"Volunteer {volunteer_name} marked your {emergency_type} request complete ({people_served} people served)."

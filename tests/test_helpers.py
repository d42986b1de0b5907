import pytest

from services.helpers import (
    classify_severity,
    construct_alert_message,
    normalize_phone,
    volunteers_needed,
)


@pytest.mark.parametrize(
    "people_count,expected",
    [(1, 1), (4, 1), (5, 1), (6, 2), (10, 2), (11, 3), (12, 3), (50, 10)],
)
def test_volunteers_needed(people_count, expected):
    assert volunteers_needed(people_count) == expected


def test_volunteers_needed_is_never_below_one():
    assert all(volunteers_needed(n) >= 1 for n in range(1, 200))


def test_normalize_phone_keeps_only_digits():
    assert normalize_phone("(555) 123-4567") == "5551234567"
    assert normalize_phone("5551234567") == "5551234567"
    assert normalize_phone(None) == ""


@pytest.mark.parametrize(
    "emergency_type,expected",
    [
        ("medical", "high"),
        ("FIRE", "high"),
        ("accident", "high"),
        ("flood", "medium"),
        ("Earthquake", "medium"),
        ("shelter", "low"),
    ],
)
def test_classify_severity_from_type(emergency_type, expected):
    assert classify_severity(emergency_type) == expected


def test_explicit_severity_wins():
    assert classify_severity("medical", "low") == "low"


def test_alert_message_truncates_description():
    message = construct_alert_message("fire", None, "x" * 60, 3)
    assert message.startswith("🚨 NEW FIRE EMERGENCY in your area: ")
    assert "x" * 50 + "..." in message
    assert message.endswith("- 3 people affected. Click to accept.")


def test_alert_message_short_description_has_no_ellipsis():
    message = construct_alert_message("flood", "Wichita Falls", "Basement flooding", 2)
    assert message == (
        "🚨 NEW FLOOD EMERGENCY in Wichita Falls: Basement flooding - 2 people affected. Click to accept."
    )

"""
Request validation rules for bookings.

Pure functions: they take the parsed request schema and return a list of
FieldError, never raising and never touching the database or HTTP layer.
Each rule is (field path, predicate, message); a rule whose field is absent
is skipped unless the rule checks presence itself.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

from booking_api.models.booking import ADMIN_ACTIONS
from booking_api.schemas.booking import AdminActionRequest, BookingCreate

EMAIL_PATTERN = re.compile(r".+@.+\..+")
PHONE_PATTERN = re.compile(r"^[0-9]{10}$")

CONTACT_REQUIRED_MESSAGE = "Contact name, email, and phone are required"
DRIVER_REQUIRED_MESSAGE = "Driver name and phone are required to confirm a booking"
DRIVER_INVALID_MESSAGE = "Invalid driver details"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class Rule:
    field: str
    check: Callable[[Any], bool]
    message: str
    when: Optional[Callable[[Any], bool]] = None


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def _is_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value.strip()) is not None


def _is_phone(value: Any) -> bool:
    return isinstance(value, str) and PHONE_PATTERN.fullmatch(value) is not None


def _resolve(data: Any, path: str) -> Any:
    value = data
    for part in path.split("."):
        if value is None:
            return None
        value = getattr(value, part, None)
    return value


def _run(rules: list[Rule], data: Any) -> list[FieldError]:
    errors = []
    failed = set()
    for rule in rules:
        if rule.field in failed:
            continue
        if rule.when is not None and not rule.when(data):
            continue
        if not rule.check(_resolve(data, rule.field)):
            failed.add(rule.field)
            errors.append(FieldError(rule.field, rule.message))
    return errors


def _optional(check: Callable[[Any], bool]) -> Callable[[Any], bool]:
    return lambda value: value is None or check(value)


def _is_distance(value: Any) -> bool:
    return math.isfinite(value) and value >= 0


def _route_stops_complete(route: Any) -> bool:
    return all(_present(stop.pickup) and _present(stop.drop) for stop in route)


CONTACT_PRESENCE_RULES = [
    Rule("contact.name", _present, "Contact name is required"),
    Rule("contact.email", _present, "Contact email is required"),
    Rule("contact.phone", _present, "Contact phone is required"),
]

BOOKING_FORMAT_RULES = [
    Rule("contact.email", _is_email, "Contact email must look like name@domain.tld"),
    Rule("contact.phone", _is_phone, "Contact phone must be exactly 10 digits"),
    Rule("distance", _optional(_is_distance), "Distance must be a finite number, zero or more"),
    Rule("route", _optional(_route_stops_complete), "Every route stop needs a pickup and a drop"),
]


def _confirming(data: AdminActionRequest) -> bool:
    return data.action == "Confirmed"


ADMIN_ACTION_RULES = [
    Rule("action", lambda a: a in ADMIN_ACTIONS, "Action must be one of: Confirmed, Canceled"),
]

DRIVER_PRESENCE_RULES = [
    Rule("driver.name", _present, "Driver name is required when confirming", when=_confirming),
    Rule("driver.phone", _present, "Driver phone is required when confirming", when=_confirming),
]

DRIVER_FORMAT_RULES = [
    Rule(
        "driver.phone",
        _optional(_is_phone),
        "Driver phone must be exactly 10 digits",
        when=_confirming,
    ),
]


def validate_contact_presence(data: BookingCreate) -> list[FieldError]:
    return _run(CONTACT_PRESENCE_RULES, data)


def validate_booking_create(data: BookingCreate) -> list[FieldError]:
    """
    Validate a booking submission.

    Presence of the contact is checked first; format rules only run once the
    contact is complete, so a caller sees either the missing fields or the
    malformed ones, never both for the same field.
    """
    errors = validate_contact_presence(data)
    if errors:
        return errors
    return _run(BOOKING_FORMAT_RULES, data)


def validate_driver_presence(data: AdminActionRequest) -> list[FieldError]:
    return _run(DRIVER_PRESENCE_RULES, data)


def validate_admin_action(data: AdminActionRequest) -> list[FieldError]:
    """Validate an admin action; driver details are only checked for confirmations."""
    return _run(ADMIN_ACTION_RULES + DRIVER_PRESENCE_RULES + DRIVER_FORMAT_RULES, data)

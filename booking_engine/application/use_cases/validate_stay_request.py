"""
Stay request validation.

Pure checks over the draft: no I/O, safe to call on every form edit.
The first failing rule per field is reported; independent fields all
report together.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Protocol

from booking_engine.application.interfaces.clock import Clock
from booking_engine.domain.entities.booking_draft import BookingDraft, GuestDetails
from booking_engine.domain.entities.room_type import RoomType

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

GUEST_FIELDS = ("first_name", "last_name", "email")
STAY_FIELDS = ("check_in_date", "check_out_date", "guests", "adults", "children")


class StayFields(Protocol):
    check_in_date: date | None
    check_out_date: date | None
    adults: int
    children: int


@dataclass(frozen=True)
class ValidationResult:
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        return ValidationResult(errors={**self.errors, **other.errors})

    @classmethod
    def valid(cls) -> "ValidationResult":
        return cls()


def _day(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


class StayRequestValidator:
    def __init__(self, clock: Clock) -> None:
        self._clock = clock

    def validate_guest(self, guest: GuestDetails) -> ValidationResult:
        errors: dict[str, str] = {}
        if not guest.first_name.strip():
            errors["first_name"] = "First name is required"
        if not guest.last_name.strip():
            errors["last_name"] = "Last name is required"
        if not guest.email.strip():
            errors["email"] = "Email is required"
        elif not EMAIL_PATTERN.match(guest.email.strip()):
            errors["email"] = "Please enter a valid email"
        return ValidationResult(errors=errors)

    def validate_stay(self, stay: StayFields, room_type: RoomType) -> ValidationResult:
        errors: dict[str, str] = {}
        check_in = stay.check_in_date
        check_out = stay.check_out_date

        if check_in is None:
            errors["check_in_date"] = "Check-in date is required"
        elif _day(check_in) < self._clock.today():
            errors["check_in_date"] = "Check-in date cannot be in the past"

        if check_out is None:
            errors["check_out_date"] = "Check-out date is required"
        elif check_in is not None and _day(check_out) <= _day(check_in):
            errors["check_out_date"] = "Check-out date must be after check-in date"

        if stay.adults + stay.children > room_type.max_occupancy:
            errors["guests"] = f"Maximum {room_type.max_occupancy} guests allowed"

        if stay.adults < 1:
            errors["adults"] = "At least 1 adult is required"
        elif stay.adults > room_type.max_adults:
            errors["adults"] = f"Maximum {room_type.max_adults} adults allowed"

        if stay.children < 0:
            errors["children"] = "Children cannot be negative"
        elif stay.children > room_type.max_children:
            errors["children"] = f"Maximum {room_type.max_children} children allowed"

        return ValidationResult(errors=errors)

    def validate(self, draft: BookingDraft, room_type: RoomType) -> ValidationResult:
        return self.validate_guest(draft.guest).merge(self.validate_stay(draft.stay, room_type))

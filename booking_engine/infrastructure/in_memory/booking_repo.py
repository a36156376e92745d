from copy import deepcopy
from datetime import date
from typing import Sequence

from booking_engine.application.interfaces.booking_repo import BookingRepo
from booking_engine.domain.entities.booking import (
    INVENTORY_BLOCKING_STATUSES,
    Booking,
    BookingStatus,
)


class InMemoryBookingRepo(BookingRepo):
    def __init__(self) -> None:
        self.bookings: dict[str, Booking] = {}

    async def create(self, booking: Booking) -> Booking:
        if booking.id in self.bookings:
            raise ValueError("Booking id already exists")
        self.bookings[booking.id] = deepcopy(booking)
        return booking

    async def get(self, booking_id: str) -> Booking | None:
        booking = self.bookings.get(booking_id)
        return deepcopy(booking) if booking else None

    async def get_by_confirmation_number(self, confirmation_number: str) -> Booking | None:
        for booking in self.bookings.values():
            if booking.confirmation_number == confirmation_number:
                return deepcopy(booking)
        return None

    async def update(self, booking: Booking) -> None:
        if booking.id not in self.bookings:
            raise ValueError("Booking not found")
        self.bookings[booking.id] = deepcopy(booking)

    async def list_overlapping(
        self,
        business_unit_id: str,
        room_type_id: str,
        check_in_date: date,
        check_out_date: date,
    ) -> Sequence[Booking]:
        return [
            deepcopy(b)
            for b in self.bookings.values()
            if b.business_unit_id == business_unit_id
            and b.room_type_id == room_type_id
            and b.status in INVENTORY_BLOCKING_STATUSES
            and b.check_in_date < check_out_date
            and b.check_out_date > check_in_date
        ]

    async def update_if_status(self, booking: Booking, expected: BookingStatus) -> bool:
        stored = self.bookings.get(booking.id)
        if stored is None or stored.status != expected:
            return False
        self.bookings[booking.id] = deepcopy(booking)
        return True

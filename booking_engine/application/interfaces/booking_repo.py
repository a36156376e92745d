from datetime import date
from typing import Sequence

from booking_engine.domain.entities.booking import Booking, BookingStatus


class BookingRepo:
    async def create(self, booking: Booking) -> Booking:
        raise NotImplementedError

    async def get(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    async def get_by_confirmation_number(self, confirmation_number: str) -> Booking | None:
        raise NotImplementedError

    async def update(self, booking: Booking) -> None:
        raise NotImplementedError

    async def update_if_status(self, booking: Booking, expected: BookingStatus) -> bool:
        """Writes the booking only if the stored status is still `expected`."""
        raise NotImplementedError

    async def list_overlapping(
        self,
        business_unit_id: str,
        room_type_id: str,
        check_in_date: date,
        check_out_date: date,
    ) -> Sequence[Booking]:
        """Bookings of the room type that hold inventory and overlap the range."""
        raise NotImplementedError

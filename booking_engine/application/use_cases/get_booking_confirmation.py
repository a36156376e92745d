from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from booking_engine.application.interfaces.booking_repo import BookingRepo
from booking_engine.application.interfaces.room_type_repo import RoomTypeRepo
from booking_engine.domain.errors import ConfirmationNotFoundError


@dataclass
class BookingConfirmation:
    confirmation_number: str
    guest_full_name: str
    room_type_name: str
    check_in_date: date
    check_out_date: date
    nights: int
    total_amount: Decimal
    currency_code: str


class GetBookingConfirmationUseCase:
    def __init__(self, booking_repo: BookingRepo, room_type_repo: RoomTypeRepo) -> None:
        self._booking_repo = booking_repo
        self._room_type_repo = room_type_repo

    async def execute(self, confirmation_number: str) -> BookingConfirmation:
        booking = await self._booking_repo.get_by_confirmation_number(
            confirmation_number.strip().upper()
        )
        if booking is None or not booking.is_paid:
            raise ConfirmationNotFoundError(confirmation_number)

        room_type = await self._room_type_repo.get(booking.business_unit_id, booking.room_type_id)
        return BookingConfirmation(
            confirmation_number=booking.confirmation_number,
            guest_full_name=booking.guest_full_name,
            room_type_name=room_type.display_name if room_type else "Room",
            check_in_date=booking.check_in_date,
            check_out_date=booking.check_out_date,
            nights=booking.nights,
            total_amount=booking.total_amount,
            currency_code=booking.currency_code,
        )

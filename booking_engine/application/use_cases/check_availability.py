import logging
from dataclasses import dataclass, field
from datetime import date

from booking_engine.application.interfaces.availability_provider import DailyAvailability
from booking_engine.application.interfaces.booking_repo import BookingRepo
from booking_engine.application.interfaces.clock import Clock
from booking_engine.application.interfaces.room_type_repo import RoomTypeRepo
from booking_engine.domain.errors import InvalidDateRangeError, RoomTypeNotFoundError
from booking_engine.domain.value_objects.stay_dates import StayDates

logger = logging.getLogger(__name__)


@dataclass
class AvailabilityReport:
    is_available: bool
    available_rooms: int
    total_rooms: int
    message: str
    check_in_date: date | None = None
    check_out_date: date | None = None
    nights: int = 0
    daily_availability: list[DailyAvailability] = field(default_factory=list)


class CheckAvailabilityUseCase:
    def __init__(
        self,
        room_type_repo: RoomTypeRepo,
        booking_repo: BookingRepo,
        clock: Clock,
    ) -> None:
        self._room_type_repo = room_type_repo
        self._booking_repo = booking_repo
        self._clock = clock

    async def execute(
        self,
        business_unit_id: str,
        room_type_id: str,
        check_in_date: date,
        check_out_date: date,
    ) -> AvailabilityReport:
        stay = StayDates(check_in=check_in_date, check_out=check_out_date)
        if check_in_date >= check_out_date:
            raise InvalidDateRangeError("Check-out date must be after check-in date")
        if check_in_date < self._clock.today():
            raise InvalidDateRangeError("Check-in date cannot be in the past")

        room_type = await self._room_type_repo.get(business_unit_id, room_type_id)
        if room_type is None:
            raise RoomTypeNotFoundError(business_unit_id, room_type_id)

        total_rooms = await self._room_type_repo.count_sellable_rooms(
            business_unit_id, room_type_id
        )
        if total_rooms == 0:
            return AvailabilityReport(
                is_available=False,
                available_rooms=0,
                total_rooms=0,
                message="No rooms of this type are currently available for booking",
            )

        overlapping = await self._booking_repo.list_overlapping(
            business_unit_id, room_type_id, check_in_date, check_out_date
        )
        booked_stays = [b.stay_dates for b in overlapping if b.stay_dates is not None]

        daily: list[DailyAvailability] = []
        for day in stay.days():
            booked = sum(1 for booked_stay in booked_stays if booked_stay.occupies(day))
            daily.append(
                DailyAvailability(
                    date=day,
                    available_rooms=max(0, total_rooms - booked),
                    total_rooms=total_rooms,
                )
            )

        min_available = min(d.available_rooms for d in daily)
        if min_available > 0:
            plural = "s" if min_available > 1 else ""
            message = f"{min_available} room{plural} available for your selected dates"
        else:
            message = "No rooms available for the selected dates"

        logger.info(
            "Availability computed",
            extra={
                "room_type_id": room_type_id,
                "total_rooms": total_rooms,
                "min_available": min_available,
                "overlapping_bookings": len(overlapping),
            },
        )
        return AvailabilityReport(
            is_available=min_available > 0,
            available_rooms=min_available,
            total_rooms=total_rooms,
            message=message,
            check_in_date=check_in_date,
            check_out_date=check_out_date,
            nights=stay.nights,
            daily_availability=daily,
        )

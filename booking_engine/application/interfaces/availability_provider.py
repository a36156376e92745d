from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailyAvailability:
    date: date
    available_rooms: int
    total_rooms: int


class AvailabilityProvider:
    """Read-only per-day room counts, used for calendar display only."""

    async def get_availability(
        self,
        business_unit_id: str,
        room_type_id: str,
        from_date: date,
        to_date: date,
    ) -> list[DailyAvailability]:
        raise NotImplementedError

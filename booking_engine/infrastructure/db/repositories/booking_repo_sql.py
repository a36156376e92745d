from dataclasses import asdict
from datetime import date
from typing import Sequence

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.application.interfaces.booking_repo import BookingRepo
from booking_engine.domain.entities.booking import (
    INVENTORY_BLOCKING_STATUSES,
    Booking,
    BookingStatus,
)
from booking_engine.infrastructure.db.tables import bookings


class BookingRepoSQL(BookingRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _values(self, booking: Booking) -> dict:
        values = asdict(booking)
        values["status"] = booking.status.value
        return values

    async def create(self, booking: Booking) -> Booking:
        await self._session.execute(insert(bookings).values(self._values(booking)))
        return booking

    async def get(self, booking_id: str) -> Booking | None:
        stmt = select(bookings).where(bookings.c.id == booking_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return self._map_booking(row) if row else None

    async def get_by_confirmation_number(self, confirmation_number: str) -> Booking | None:
        stmt = (
            select(bookings)
            .where(bookings.c.confirmation_number == confirmation_number)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return self._map_booking(row) if row else None

    async def update(self, booking: Booking) -> None:
        values = self._values(booking)
        values.pop("id")
        stmt = update(bookings).where(bookings.c.id == booking.id).values(values)
        await self._session.execute(stmt)

    async def update_if_status(self, booking: Booking, expected: BookingStatus) -> bool:
        values = self._values(booking)
        values.pop("id")
        stmt = (
            update(bookings)
            .where(bookings.c.id == booking.id, bookings.c.status == expected.value)
            .values(values)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def list_overlapping(
        self,
        business_unit_id: str,
        room_type_id: str,
        check_in_date: date,
        check_out_date: date,
    ) -> Sequence[Booking]:
        stmt = select(bookings).where(
            bookings.c.business_unit_id == business_unit_id,
            bookings.c.room_type_id == room_type_id,
            bookings.c.status.in_([s.value for s in INVENTORY_BLOCKING_STATUSES]),
            bookings.c.check_in_date < check_out_date,
            bookings.c.check_out_date > check_in_date,
        )
        result = await self._session.execute(stmt)
        return [self._map_booking(row) for row in result.mappings().all()]

    def _map_booking(self, row) -> Booking:
        return Booking(
            id=row["id"],
            business_unit_id=row["business_unit_id"],
            room_type_id=row["room_type_id"],
            confirmation_number=row["confirmation_number"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            phone=row["phone"],
            special_requests=row["special_requests"] or "",
            guest_notes=row["guest_notes"] or "",
            check_in_date=row["check_in_date"],
            check_out_date=row["check_out_date"],
            adults=row["adults"],
            children=row["children"],
            nights=row["nights"],
            subtotal=row["subtotal"],
            taxes=row["taxes"],
            service_fee=row["service_fee"],
            total_amount=row["total_amount"],
            currency_code=row["currency_code"],
            status=BookingStatus(row["status"]),
            payment_session_id=row["payment_session_id"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.application.interfaces.room_type_repo import RoomTypeRepo
from booking_engine.domain.entities.room_type import SELLABLE_ROOM_STATUSES, RoomType
from booking_engine.infrastructure.db.tables import room_types, rooms


class RoomTypeRepoSQL(RoomTypeRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, business_unit_id: str, room_type_id: str) -> RoomType | None:
        stmt = (
            select(room_types)
            .where(
                room_types.c.id == room_type_id,
                room_types.c.business_unit_id == business_unit_id,
                room_types.c.is_active.is_(True),
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return RoomType(
            id=row["id"],
            business_unit_id=row["business_unit_id"],
            display_name=row["display_name"],
            description=row["description"],
            max_occupancy=row["max_occupancy"],
            max_adults=row["max_adults"],
            max_children=row["max_children"],
            base_rate=row["base_rate"],
            currency_code=row["currency_code"],
            base_occupancy=row["base_occupancy"],
            extra_adult_rate=row["extra_adult_rate"],
            extra_child_rate=row["extra_child_rate"],
            is_active=bool(row["is_active"]),
        )

    async def count_sellable_rooms(self, business_unit_id: str, room_type_id: str) -> int:
        stmt = select(func.count()).select_from(rooms).where(
            rooms.c.room_type_id == room_type_id,
            rooms.c.business_unit_id == business_unit_id,
            rooms.c.is_active.is_(True),
            rooms.c.status.in_([s.value for s in SELLABLE_ROOM_STATUSES]),
        )
        result = await self._session.execute(stmt)
        return int(result.scalar() or 0)

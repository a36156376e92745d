from booking_engine.domain.entities.room_type import RoomType


class RoomTypeRepo:
    async def get(self, business_unit_id: str, room_type_id: str) -> RoomType | None:
        """Returns the room type only if it is active."""
        raise NotImplementedError

    async def count_sellable_rooms(self, business_unit_id: str, room_type_id: str) -> int:
        raise NotImplementedError

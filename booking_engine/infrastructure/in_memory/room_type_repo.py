from booking_engine.application.interfaces.room_type_repo import RoomTypeRepo
from booking_engine.domain.entities.room_type import Room, RoomType


class InMemoryRoomTypeRepo(RoomTypeRepo):
    def __init__(self) -> None:
        self.room_types: dict[tuple[str, str], RoomType] = {}
        self.rooms: list[Room] = []

    def add_room_type(self, room_type: RoomType, rooms: list[Room] | None = None) -> None:
        self.room_types[(room_type.business_unit_id, room_type.id)] = room_type
        self.rooms.extend(rooms or [])

    async def get(self, business_unit_id: str, room_type_id: str) -> RoomType | None:
        room_type = self.room_types.get((business_unit_id, room_type_id))
        if room_type is None or not room_type.is_active:
            return None
        return room_type

    async def count_sellable_rooms(self, business_unit_id: str, room_type_id: str) -> int:
        return sum(
            1
            for room in self.rooms
            if room.business_unit_id == business_unit_id
            and room.room_type_id == room_type_id
            and room.is_sellable
        )

"""Catálogo de demostración: una propiedad con un tipo de habitación y su inventario."""

from decimal import Decimal

from booking_engine.domain.entities.room_type import Room, RoomStatus, RoomType

DEMO_BUSINESS_UNIT_ID = "bu-seaside"
DEMO_ROOM_TYPE_ID = "rt-deluxe-suite"

DEMO_ROOM_TYPE = RoomType(
    id=DEMO_ROOM_TYPE_ID,
    business_unit_id=DEMO_BUSINESS_UNIT_ID,
    display_name="Deluxe Suite",
    description="Ocean view suite with a king bed and a sofa bed",
    max_occupancy=4,
    max_adults=3,
    max_children=2,
    base_rate=Decimal("5500.00"),
    currency_code="PHP",
    base_occupancy=2,
    extra_adult_rate=Decimal("1200.00"),
    extra_child_rate=Decimal("600.00"),
)

DEMO_ROOMS = [
    Room(id="room-301", business_unit_id=DEMO_BUSINESS_UNIT_ID, room_type_id=DEMO_ROOM_TYPE_ID),
    Room(id="room-302", business_unit_id=DEMO_BUSINESS_UNIT_ID, room_type_id=DEMO_ROOM_TYPE_ID),
    Room(
        id="room-303",
        business_unit_id=DEMO_BUSINESS_UNIT_ID,
        room_type_id=DEMO_ROOM_TYPE_ID,
        status=RoomStatus.CLEANING,
    ),
    Room(
        id="room-304",
        business_unit_id=DEMO_BUSINESS_UNIT_ID,
        room_type_id=DEMO_ROOM_TYPE_ID,
        status=RoomStatus.MAINTENANCE,
    ),
]

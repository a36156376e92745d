import asyncio
import sys
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from sqlalchemy import delete, insert  # noqa: E402

from booking_engine.api.deps import engine  # noqa: E402
from booking_engine.infrastructure.db.tables import metadata, room_types, rooms  # noqa: E402
from booking_engine.infrastructure.demo_catalog import DEMO_ROOM_TYPE, DEMO_ROOMS  # noqa: E402


async def seed():
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        print("Created missing tables.")

        await conn.execute(delete(rooms).where(rooms.c.room_type_id == DEMO_ROOM_TYPE.id))
        await conn.execute(delete(room_types).where(room_types.c.id == DEMO_ROOM_TYPE.id))

        await conn.execute(
            insert(room_types).values(
                id=DEMO_ROOM_TYPE.id,
                business_unit_id=DEMO_ROOM_TYPE.business_unit_id,
                display_name=DEMO_ROOM_TYPE.display_name,
                description=DEMO_ROOM_TYPE.description,
                max_occupancy=DEMO_ROOM_TYPE.max_occupancy,
                max_adults=DEMO_ROOM_TYPE.max_adults,
                max_children=DEMO_ROOM_TYPE.max_children,
                base_rate=DEMO_ROOM_TYPE.base_rate,
                currency_code=DEMO_ROOM_TYPE.currency_code,
                base_occupancy=DEMO_ROOM_TYPE.base_occupancy,
                extra_adult_rate=DEMO_ROOM_TYPE.extra_adult_rate,
                extra_child_rate=DEMO_ROOM_TYPE.extra_child_rate,
                is_active=DEMO_ROOM_TYPE.is_active,
            )
        )
        await conn.execute(
            insert(rooms),
            [
                {
                    "id": room.id,
                    "business_unit_id": room.business_unit_id,
                    "room_type_id": room.room_type_id,
                    "room_number": room.id.removeprefix("room-"),
                    "status": room.status.value,
                    "is_active": room.is_active,
                }
                for room in DEMO_ROOMS
            ],
        )
        print(
            f"Seeded room type {DEMO_ROOM_TYPE.id} "
            f"({DEMO_ROOM_TYPE.business_unit_id}) with {len(DEMO_ROOMS)} rooms."
        )

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())

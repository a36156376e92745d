"""Entidades del dominio de reservas."""

from booking_engine.domain.entities.booking import (
    INVENTORY_BLOCKING_STATUSES,
    Booking,
    BookingStatus,
)
from booking_engine.domain.entities.booking_draft import (
    BookingDraft,
    GuestDetails,
    StayDetails,
    StayRequest,
)
from booking_engine.domain.entities.payment_session import (
    PaymentSession,
    PaymentSessionStatus,
    map_provider_status,
)
from booking_engine.domain.entities.room_type import (
    SELLABLE_ROOM_STATUSES,
    Room,
    RoomStatus,
    RoomType,
)

__all__ = [
    # Booking
    "Booking",
    "BookingStatus",
    "INVENTORY_BLOCKING_STATUSES",
    # Draft
    "BookingDraft",
    "GuestDetails",
    "StayDetails",
    "StayRequest",
    # Payment
    "PaymentSession",
    "PaymentSessionStatus",
    "map_provider_status",
    # Catalog
    "Room",
    "RoomStatus",
    "RoomType",
    "SELLABLE_ROOM_STATUSES",
]

"""Implementaciones in-memory para desarrollo local y testing."""

from booking_engine.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from booking_engine.infrastructure.in_memory.checkout_gateway import StubCheckoutGateway
from booking_engine.infrastructure.in_memory.payment_session_repo import (
    InMemoryPaymentSessionRepo,
)
from booking_engine.infrastructure.in_memory.room_type_repo import InMemoryRoomTypeRepo
from booking_engine.infrastructure.in_memory.transaction_manager import (
    NoopTransactionManager as InMemoryTransactionManager,
)

__all__ = [
    # Repositories
    "InMemoryRoomTypeRepo",
    "InMemoryBookingRepo",
    "InMemoryPaymentSessionRepo",
    # Gateways
    "StubCheckoutGateway",
    # Infrastructure
    "InMemoryTransactionManager",
]

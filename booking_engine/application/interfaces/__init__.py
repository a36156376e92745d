"""Puertos (interfaces) de la capa de aplicación."""

from booking_engine.application.interfaces.availability_provider import (
    AvailabilityProvider,
    DailyAvailability,
)
from booking_engine.application.interfaces.booking_gateway import (
    BookingGateway,
    BookingSnapshot,
    CheckoutHandle,
    PaymentStatusResult,
)
from booking_engine.application.interfaces.booking_repo import BookingRepo
from booking_engine.application.interfaces.checkout_launcher import CheckoutLauncher
from booking_engine.application.interfaces.clock import Clock, FakeClock, SystemClock
from booking_engine.application.interfaces.payment_gateway import (
    CheckoutSessionResult,
    PaymentGateway,
)
from booking_engine.application.interfaces.payment_session_repo import PaymentSessionRepo
from booking_engine.application.interfaces.pricing_provider import PricingProvider
from booking_engine.application.interfaces.room_type_repo import RoomTypeRepo
from booking_engine.application.interfaces.transaction_manager import TransactionManager

__all__ = [
    # Consumed contracts (client side)
    "AvailabilityProvider",
    "DailyAvailability",
    "PricingProvider",
    "BookingGateway",
    "BookingSnapshot",
    "CheckoutHandle",
    "PaymentStatusResult",
    "CheckoutLauncher",
    # Repositories (server side)
    "BookingRepo",
    "PaymentSessionRepo",
    "RoomTypeRepo",
    # Gateways
    "PaymentGateway",
    "CheckoutSessionResult",
    # Infrastructure
    "TransactionManager",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
]

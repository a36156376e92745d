"""Servicios de infraestructura."""

from booking_engine.infrastructure.services.checkout_launcher import (
    BrowserCheckoutLauncher,
    RecordingCheckoutLauncher,
)
from booking_engine.infrastructure.services.code_generator import (
    generate_booking_id,
    generate_confirmation_number,
)

__all__ = [
    "BrowserCheckoutLauncher",
    "RecordingCheckoutLauncher",
    "generate_booking_id",
    "generate_confirmation_number",
]

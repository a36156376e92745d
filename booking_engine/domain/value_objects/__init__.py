"""Value Objects del dominio de reservas."""

from booking_engine.domain.value_objects.confirmation_number import ConfirmationNumber
from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown, to_amount
from booking_engine.domain.value_objects.stay_dates import StayDates, nights_between

__all__ = [
    "ConfirmationNumber",
    "PriceBreakdown",
    "StayDates",
    "nights_between",
    "to_amount",
]

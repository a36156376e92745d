from datetime import date, datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, condecimal, constr
from pydantic.alias_generators import to_camel

# Importes monetarios: Decimal en dominio, número en JSON
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
Money = condecimal(max_digits=12, decimal_places=2, ge=0)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === Availability ===


class RequestedDates(CamelModel):
    check_in: date
    check_out: date
    nights: int


class DailyAvailabilityResponse(CamelModel):
    date: date
    available_rooms: int
    total_rooms: int


class AvailabilityResponse(CamelModel):
    is_available: bool
    available_rooms: int
    total_rooms: int
    requested_dates: RequestedDates | None = None
    daily_availability: list[DailyAvailabilityResponse] = Field(default_factory=list)
    message: str


# === Pricing ===


class PricingResponse(CamelModel):
    subtotal: Amount
    nights: int
    taxes: Amount
    service_fee: Amount
    total_amount: Amount
    currency: str


# === Booking ===


class CreateBookingWithPaymentRequest(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    business_unit_id: constr(strip_whitespace=True, min_length=1)
    room_type_id: constr(strip_whitespace=True, min_length=1)

    # Guest
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    special_requests: str = ""
    guest_notes: str = ""

    # Stay
    check_in_date: date | None = None
    check_out_date: date | None = None
    adults: int = 1
    children: int = 0

    # Confirmed price
    nights: int
    subtotal: Money
    taxes: Money
    service_fee: Money
    total_amount: Money


class CreateBookingWithPaymentResponse(CamelModel):
    booking_id: str
    checkout_url: str
    payment_session_id: str


class PaymentDetailsResponse(CamelModel):
    amount: Amount
    currency: str
    method: str
    provider: str
    processed_at: datetime | None = None


class PaymentStatusResponse(CamelModel):
    status: str
    reservation_id: str
    confirmation_number: str | None = None
    message: str
    payment_details: PaymentDetailsResponse | None = None


class BookingConfirmationResponse(CamelModel):
    confirmation_number: str
    guest_full_name: str
    room_type_name: str
    check_in_date: date
    check_out_date: date
    nights: int
    total_amount: Amount
    currency: str


class ValidationErrorResponse(BaseModel):
    error: str
    fields: dict[str, str]

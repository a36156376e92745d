from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class BookingSnapshot:
    """Guest/stay data plus the price breakdown the guest confirmed."""

    business_unit_id: str
    room_type_id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    check_in_date: date
    check_out_date: date
    adults: int
    children: int
    nights: int
    subtotal: Decimal
    taxes: Decimal
    service_fee: Decimal
    total_amount: Decimal
    special_requests: str = ""
    guest_notes: str = ""

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CheckoutHandle:
    checkout_url: str
    payment_session_id: str
    booking_id: str | None = None


@dataclass(frozen=True)
class PaymentStatusResult:
    status: str
    confirmation_number: str | None = None
    reservation_id: str | None = None
    message: str | None = None


class BookingGateway:
    async def create_booking_with_payment(self, snapshot: BookingSnapshot) -> CheckoutHandle:
        """Not idempotent: call at most once per guest confirmation."""
        raise NotImplementedError

    async def get_payment_status(self, payment_session_id: str) -> PaymentStatusResult:
        raise NotImplementedError

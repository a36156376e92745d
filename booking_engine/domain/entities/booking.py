"""Entidad Booking - reserva persistida, agregado raíz del lado servidor."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from booking_engine.domain.errors import InvalidBookingStatusError
from booking_engine.domain.value_objects.price_breakdown import ZERO, PriceBreakdown
from booking_engine.domain.value_objects.stay_dates import StayDates


class BookingStatus(str, Enum):
    """Estados posibles de una reserva."""

    CREATED = "created"
    PAYMENT_PENDING = "payment_pending"
    PAID = "paid"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (BookingStatus.PAID, BookingStatus.FAILED, BookingStatus.CANCELLED)


ALLOWED_TRANSITIONS: dict[BookingStatus, tuple[BookingStatus, ...]] = {
    BookingStatus.CREATED: (BookingStatus.PAYMENT_PENDING, BookingStatus.FAILED),
    BookingStatus.PAYMENT_PENDING: (
        BookingStatus.PAID,
        BookingStatus.FAILED,
        BookingStatus.CANCELLED,
    ),
    BookingStatus.PAID: (),
    BookingStatus.FAILED: (),
    BookingStatus.CANCELLED: (),
}

# Reservas que consumen inventario al calcular disponibilidad
INVENTORY_BLOCKING_STATUSES = (
    BookingStatus.CREATED,
    BookingStatus.PAYMENT_PENDING,
    BookingStatus.PAID,
)


@dataclass
class Booking:
    """
    Reserva creada en el envío final del asistente.

    Guarda una instantánea del borrador y del desglose de precio que el
    huésped confirmó; el precio nunca se recalcula tras el envío.
    """

    # Identificadores
    id: str = ""
    business_unit_id: str = ""
    room_type_id: str = ""
    confirmation_number: str | None = None

    # Huésped
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    special_requests: str = ""
    guest_notes: str = ""

    # Estancia
    check_in_date: date | None = None
    check_out_date: date | None = None
    adults: int = 1
    children: int = 0

    # Precio confirmado
    nights: int = 0
    subtotal: Decimal = ZERO
    taxes: Decimal = ZERO
    service_fee: Decimal = ZERO
    total_amount: Decimal = ZERO
    currency_code: str = "PHP"

    # Estado y pago
    status: BookingStatus = BookingStatus.CREATED
    payment_session_id: str | None = None

    # Timestamps
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # === Propiedades calculadas ===

    @property
    def guest_full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def stay_dates(self) -> StayDates | None:
        if self.check_in_date and self.check_out_date:
            return StayDates(check_in=self.check_in_date, check_out=self.check_out_date)
        return None

    @property
    def price(self) -> PriceBreakdown:
        return PriceBreakdown(
            nights=self.nights,
            subtotal=self.subtotal,
            taxes=self.taxes,
            service_fee=self.service_fee,
            total_amount=self.total_amount,
            currency_code=self.currency_code,
        )

    @property
    def is_paid(self) -> bool:
        return self.status == BookingStatus.PAID

    # === Métodos de negocio ===

    def _transition(self, target: BookingStatus) -> None:
        if target not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidBookingStatusError(self.status.value, target.value)
        self.status = target

    def mark_payment_pending(self, payment_session_id: str) -> None:
        """Asocia la sesión de pago y marca la reserva como pendiente de pago."""
        self._transition(BookingStatus.PAYMENT_PENDING)
        self.payment_session_id = payment_session_id

    def mark_paid(self, confirmation_number: str) -> None:
        """Marca la reserva como pagada; el número de confirmación se asigna una sola vez."""
        self._transition(BookingStatus.PAID)
        if not self.confirmation_number:
            self.confirmation_number = confirmation_number

    def mark_failed(self) -> None:
        self._transition(BookingStatus.FAILED)

    def cancel(self) -> None:
        self._transition(BookingStatus.CANCELLED)

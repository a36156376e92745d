"""Estado acumulado del asistente de reserva (no persistido hasta el envío final)."""

from dataclasses import dataclass, field
from datetime import date

from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown
from booking_engine.domain.value_objects.stay_dates import StayDates


@dataclass
class GuestDetails:
    """Datos de identidad del huésped."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    special_requests: str = ""
    guest_notes: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name.strip()} {self.last_name.strip()}".strip()


@dataclass(frozen=True)
class StayRequest:
    """
    Consulta de reserva prospectiva.

    Se construye nueva por cada cotización y es inmutable una vez entregada
    al resolvedor de tarifas.
    """

    business_unit_id: str
    room_type_id: str
    check_in_date: date
    check_out_date: date
    adults: int = 1
    children: int = 0

    @property
    def dates(self) -> StayDates:
        return StayDates(check_in=self.check_in_date, check_out=self.check_out_date)

    @property
    def nights(self) -> int:
        return self.dates.nights

    @property
    def total_guests(self) -> int:
        return self.adults + self.children


@dataclass
class StayDetails:
    """Campos de estancia editables; las fechas pueden estar sin elegir."""

    check_in_date: date | None = None
    check_out_date: date | None = None
    adults: int = 1
    children: int = 0

    @property
    def has_dates(self) -> bool:
        return self.check_in_date is not None and self.check_out_date is not None

    @property
    def total_guests(self) -> int:
        return self.adults + self.children

    def to_request(self, business_unit_id: str, room_type_id: str) -> StayRequest | None:
        if not self.has_dates:
            return None
        return StayRequest(
            business_unit_id=business_unit_id,
            room_type_id=room_type_id,
            check_in_date=self.check_in_date,
            check_out_date=self.check_out_date,
            adults=self.adults,
            children=self.children,
        )


@dataclass
class BookingDraft:
    """
    Estado en progreso del asistente.

    Se crea vacío al montar el asistente, lo mutan los pasos y nunca se
    envía parcialmente.
    """

    guest: GuestDetails = field(default_factory=GuestDetails)
    stay: StayDetails = field(default_factory=StayDetails)
    price: PriceBreakdown | None = None

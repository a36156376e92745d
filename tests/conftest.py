"""
Pytest configuration and shared fixtures.

Este módulo provee fixtures reutilizables para:
- Reloj fijo y tipo de habitación de prueba
- Fakes de los colaboradores externos (precios, reservas, checkout)
- Cliente HTTP de prueba (FastAPI TestClient) sobre el bundle in-memory
- Reseteo de circuit breakers entre tests
"""

import asyncio
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from booking_engine.api.dependencies import _in_memory_bundle
from booking_engine.application.interfaces.availability_provider import (
    AvailabilityProvider,
    DailyAvailability,
)
from booking_engine.application.interfaces.booking_gateway import (
    BookingGateway,
    CheckoutHandle,
    PaymentStatusResult,
)
from booking_engine.application.interfaces.clock import FakeClock
from booking_engine.application.interfaces.pricing_provider import PricingProvider
from booking_engine.domain.entities.room_type import RoomType
from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown
from booking_engine.infrastructure.circuit_breaker import (
    payment_provider_breaker,
    payment_status_breaker,
    pricing_breaker,
)
from booking_engine.infrastructure.demo_catalog import DEMO_BUSINESS_UNIT_ID, DEMO_ROOM_TYPE_ID
from booking_engine.infrastructure.in_memory import StubCheckoutGateway
from booking_engine.infrastructure.services.checkout_launcher import RecordingCheckoutLauncher
from booking_engine.main import app

FIXED_NOW = datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)


# ============================================================================
# FAKES
# ============================================================================


class FakePricingProvider(PricingProvider):
    """Devuelve un desglose fijo o lanza el error configurado."""

    def __init__(self, breakdown: PriceBreakdown | None = None, error: Exception | None = None):
        self.breakdown = breakdown
        self.error = error
        self.calls: list[dict] = []
        self.gates: list[asyncio.Event] = []

    async def get_quote(self, business_unit_id, room_type_id, check_in_date, check_out_date,
                        adults=None, children=None) -> PriceBreakdown:
        self.calls.append(
            {
                "check_in_date": check_in_date,
                "check_out_date": check_out_date,
                "adults": adults,
                "children": children,
            }
        )
        if self.gates:
            await self.gates.pop(0).wait()
        if self.error is not None:
            raise self.error
        if self.breakdown is not None:
            return self.breakdown
        nights = (check_out_date - check_in_date).days
        subtotal = Decimal("1000.00") * nights
        return PriceBreakdown(
            nights=nights,
            subtotal=subtotal,
            taxes=subtotal * Decimal("0.12"),
            service_fee=subtotal * Decimal("0.10"),
        )


class FakeBookingGateway(BookingGateway):
    """Registra los envíos y responde estados de pago de una secuencia."""

    def __init__(self) -> None:
        self.created: list = []
        self.create_error: Exception | None = None
        self.create_gate: asyncio.Event | None = None
        self.statuses: list[PaymentStatusResult | Exception] = []
        self.status_calls = 0

    async def create_booking_with_payment(self, snapshot) -> CheckoutHandle:
        self.created.append(snapshot)
        if self.create_gate is not None:
            await self.create_gate.wait()
        if self.create_error is not None:
            raise self.create_error
        return CheckoutHandle(
            checkout_url="https://checkout.test/cs_test_1",
            payment_session_id="cs_test_1",
            booking_id="booking-1",
        )

    async def get_payment_status(self, payment_session_id: str) -> PaymentStatusResult:
        self.status_calls += 1
        if not self.statuses:
            return PaymentStatusResult(status="pending", reservation_id="booking-1")
        result = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
        if isinstance(result, Exception):
            raise result
        return result


class FakeAvailabilityProvider(AvailabilityProvider):
    """Un día por fecha del rango; las fechas de `booked_out` quedan sin habitaciones."""

    def __init__(self, total: int = 3) -> None:
        self.total = total
        self.booked_out: set[date] = set()
        self.error: Exception | None = None
        self.calls: list[tuple[date, date]] = []

    async def get_availability(self, business_unit_id, room_type_id, from_date, to_date):
        self.calls.append((from_date, to_date))
        if self.error is not None:
            raise self.error
        days = []
        day = from_date
        while day < to_date:
            available = 0 if day in self.booked_out else self.total
            days.append(DailyAvailability(date=day, available_rooms=available, total_rooms=self.total))
            day += timedelta(days=1)
        return days


class GatedCheckoutGateway(StubCheckoutGateway):
    """Retiene retrieve hasta que lleguen `expected` consultas simultáneas."""

    def __init__(self, expected: int = 2) -> None:
        super().__init__()
        self._expected = expected
        self._arrived = 0
        self._all_arrived = asyncio.Event()

    async def retrieve_checkout_session(self, session_id: str):
        self._arrived += 1
        if self._arrived >= self._expected:
            self._all_arrived.set()
        await self._all_arrived.wait()
        return await super().retrieve_checkout_session(session_id)


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(FIXED_NOW)


@pytest.fixture
def today(clock) -> date:
    return clock.today()


@pytest.fixture
def room_type() -> RoomType:
    return RoomType(
        id="rt-standard",
        business_unit_id="bu-1",
        display_name="Standard Double",
        max_occupancy=4,
        max_adults=3,
        max_children=2,
        base_rate=Decimal("1000.00"),
        currency_code="PHP",
    )


@pytest.fixture
def pricing_provider() -> FakePricingProvider:
    return FakePricingProvider()


@pytest.fixture
def booking_gateway() -> FakeBookingGateway:
    return FakeBookingGateway()


@pytest.fixture
def availability_provider() -> FakeAvailabilityProvider:
    return FakeAvailabilityProvider()


@pytest.fixture
def gated_checkout_gateway() -> GatedCheckoutGateway:
    """Checkout stub cuyo retrieve espera a dos consultas simultáneas."""
    return GatedCheckoutGateway(expected=2)


@pytest.fixture
def launcher() -> RecordingCheckoutLauncher:
    return RecordingCheckoutLauncher()


@pytest.fixture
def client():
    """TestClient sobre un bundle in-memory limpio por test."""
    _in_memory_bundle.cache_clear()
    with TestClient(app) as test_client:
        yield test_client
    _in_memory_bundle.cache_clear()


@pytest.fixture
def bundle(client):
    return _in_memory_bundle()


@pytest.fixture
def demo_ids() -> dict:
    return {"businessUnitId": DEMO_BUSINESS_UNIT_ID, "roomTypeId": DEMO_ROOM_TYPE_ID}


@pytest.fixture
def future_stay() -> tuple[date, date]:
    """Fechas relativas al día real: la API usa el reloj del sistema."""
    check_in = datetime.now(timezone.utc).date() + timedelta(days=30)
    return check_in, check_in + timedelta(days=3)


@pytest.fixture(autouse=True)
def reset_circuit_breakers():
    """
    Reset circuit breakers antes de cada test.
    Evita que tests fallen por breakers abiertos de tests anteriores.
    """
    for breaker in (payment_provider_breaker, pricing_breaker, payment_status_breaker):
        breaker.close()
    yield
    for breaker in (payment_provider_breaker, pricing_breaker, payment_status_breaker):
        breaker.close()

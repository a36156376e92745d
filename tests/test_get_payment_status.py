import asyncio
import itertools
from datetime import timedelta
from decimal import Decimal

import pytest

from booking_engine.application.use_cases.get_payment_status import GetPaymentStatusUseCase
from booking_engine.domain.entities.booking import Booking, BookingStatus
from booking_engine.domain.entities.payment_session import PaymentSession, PaymentSessionStatus
from booking_engine.infrastructure.in_memory import (
    InMemoryBookingRepo,
    InMemoryPaymentSessionRepo,
    InMemoryTransactionManager,
    StubCheckoutGateway,
)


def _sequential_numbers():
    counter = itertools.count(1)
    return lambda: f"CNF{next(counter):08d}"


@pytest.fixture
def repos():
    return InMemoryBookingRepo(), InMemoryPaymentSessionRepo()


async def _pending_booking(repos, gateway, today) -> str:
    bookings, sessions = repos
    checkout = await gateway.create_checkout_session(
        booking_id="booking-1",
        description="Standard Double (2 night(s))",
        amount=Decimal("2440.00"),
        currency="PHP",
        customer_email="maria@example.com",
        success_url="http://localhost/success",
        cancel_url="http://localhost/cancel",
    )
    await bookings.create(
        Booking(
            id="booking-1",
            business_unit_id="bu-1",
            room_type_id="rt-standard",
            first_name="Maria",
            last_name="Santos",
            email="maria@example.com",
            check_in_date=today + timedelta(days=5),
            check_out_date=today + timedelta(days=7),
            nights=2,
            subtotal=Decimal("2000.00"),
            taxes=Decimal("240.00"),
            service_fee=Decimal("200.00"),
            total_amount=Decimal("2440.00"),
            status=BookingStatus.PAYMENT_PENDING,
            payment_session_id=checkout.session_id,
        )
    )
    await sessions.create(
        PaymentSession(
            session_id=checkout.session_id,
            booking_id="booking-1",
            checkout_url=checkout.checkout_url,
            amount=Decimal("2440.00"),
        )
    )
    return checkout.session_id


def _use_case(repos, gateway, clock, generator) -> GetPaymentStatusUseCase:
    bookings, sessions = repos
    return GetPaymentStatusUseCase(
        payment_session_repo=sessions,
        booking_repo=bookings,
        payment_gateway=gateway,
        transaction_manager=InMemoryTransactionManager(),
        clock=clock,
        confirmation_generator=generator,
    )


async def test_concurrent_polls_share_one_confirmation_number(
    repos, clock, today, gated_checkout_gateway
):
    gateway = gated_checkout_gateway
    session_id = await _pending_booking(repos, gateway, today)
    gateway.complete(session_id)
    generator = _sequential_numbers()

    first, second = await asyncio.gather(
        _use_case(repos, gateway, clock, generator).execute(session_id),
        _use_case(repos, gateway, clock, generator).execute(session_id),
    )

    assert first.status == second.status == PaymentSessionStatus.PAID
    assert first.confirmation_number == second.confirmation_number == "CNF00000001"
    stored = await repos[0].get("booking-1")
    assert stored.confirmation_number == "CNF00000001"
    assert stored.status == BookingStatus.PAID


async def test_concurrent_expiry_cancels_once(repos, clock, today, gated_checkout_gateway):
    gateway = gated_checkout_gateway
    session_id = await _pending_booking(repos, gateway, today)
    gateway.expire(session_id)

    first, second = await asyncio.gather(
        _use_case(repos, gateway, clock, _sequential_numbers()).execute(session_id),
        _use_case(repos, gateway, clock, _sequential_numbers()).execute(session_id),
    )

    assert first.status == second.status == PaymentSessionStatus.CANCELLED
    assert (await repos[0].get("booking-1")).status == BookingStatus.CANCELLED


async def test_open_session_stays_pending_without_writes(repos, clock, today):
    gateway = StubCheckoutGateway()
    session_id = await _pending_booking(repos, gateway, today)

    report = await _use_case(repos, gateway, clock, _sequential_numbers()).execute(session_id)

    assert report.status == PaymentSessionStatus.PENDING
    assert report.confirmation_number is None
    assert (await repos[0].get("booking-1")).status == BookingStatus.PAYMENT_PENDING


async def test_terminal_session_is_not_reconciled_again(repos, clock, today):
    gateway = StubCheckoutGateway()
    session_id = await _pending_booking(repos, gateway, today)
    gateway.complete(session_id)
    use_case = _use_case(repos, gateway, clock, _sequential_numbers())

    paid = await use_case.execute(session_id)
    gateway.expire(session_id)
    again = await use_case.execute(session_id)

    assert again.status == PaymentSessionStatus.PAID
    assert again.confirmation_number == paid.confirmation_number

"""Guest flow end to end: wizard -> HTTP client -> API -> in-memory storage."""

import asyncio
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from booking_engine.api.dependencies import _in_memory_bundle
from booking_engine.application.interfaces.clock import SystemClock
from booking_engine.application.use_cases.booking_wizard import (
    AVAILABILITY_FAILED_MESSAGE,
    GuestKind,
    WizardStep,
)
from booking_engine.application.use_cases.reconcile_payment import PaymentPollState
from booking_engine.client import build_booking_wizard
from booking_engine.config import Settings
from booking_engine.infrastructure.demo_catalog import DEMO_ROOM_TYPE
from booking_engine.infrastructure.gateways.booking_api_client import BookingApiClient
from booking_engine.main import app


@pytest.fixture
def api_client():
    _in_memory_bundle.cache_clear()
    yield BookingApiClient(
        base_url="http://test/api",
        transport=httpx.ASGITransport(app=app),
    )
    _in_memory_bundle.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(payment_poll_interval_seconds=0.01, payment_poll_timeout_seconds=2)


async def test_guest_books_and_pays(api_client, settings, launcher):
    today = datetime.now(timezone.utc).date()
    async with build_booking_wizard(
        DEMO_ROOM_TYPE,
        settings=settings,
        api_client=api_client,
        checkout_launcher=launcher,
        clock=SystemClock(),
    ) as wizard:
        wizard.update_guest(
            first_name="Juan",
            last_name="Dela Cruz",
            email="juan@example.com",
            phone="+63 917 555 0199",
        )
        assert wizard.next()

        await wizard.load_availability(today)
        assert wizard.availability_error is None
        assert today in wizard.availability
        assert not wizard.is_fully_booked(today)

        await wizard.set_check_in_date(today + timedelta(days=14))
        await wizard.set_check_out_date(today + timedelta(days=16))
        await wizard.adjust_guests(GuestKind.CHILDREN, increment=True)
        assert wizard.next()
        assert wizard.step == WizardStep.REVIEW_AND_PAY

        # (5500 + 600 child surcharge) x 2 nights, plus 12% tax and 10% fee
        assert str(wizard.price.subtotal) == "12200.00"
        assert str(wizard.price.total_amount) == "14884.00"
        assert wizard.price.is_estimate is False

        outcome = await wizard.submit()
        assert outcome.status == PaymentPollState.CHECKING
        assert launcher.opened and launcher.opened[0].endswith(outcome.payment_session_id)

        # The guest pays on the provider's page.
        _in_memory_bundle()["payment_gateway"].complete(outcome.payment_session_id)

        final = await asyncio.wait_for(wizard.wait_for_payment(), timeout=5)

    assert final.status == PaymentPollState.PAID
    assert final.confirmation_number.startswith("CNF")
    assert final.reservation_id == outcome.reservation_id


async def test_pricing_outage_falls_back_to_estimate(settings, launcher):
    unreachable = BookingApiClient(
        base_url="http://test/api",
        transport=httpx.MockTransport(lambda request: httpx.Response(503, json={"error": "down"})),
    )
    today = datetime.now(timezone.utc).date()
    async with build_booking_wizard(
        DEMO_ROOM_TYPE, settings=settings, api_client=unreachable, checkout_launcher=launcher
    ) as wizard:
        await wizard.set_check_in_date(today + timedelta(days=3))
        await wizard.set_check_out_date(today + timedelta(days=5))

        assert wizard.price.is_estimate is True
        assert str(wizard.price.total_amount) == "11000.00"

        await wizard.load_availability(today)
        assert wizard.availability_error == AVAILABILITY_FAILED_MESSAGE

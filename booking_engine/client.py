"""Wiring for the guest-facing booking flow (wizard + HTTP gateway)."""

from booking_engine.application.interfaces.checkout_launcher import CheckoutLauncher
from booking_engine.application.interfaces.clock import Clock, SystemClock
from booking_engine.application.use_cases.booking_wizard import BookingFlowConfig, BookingWizard
from booking_engine.application.use_cases.quote_stay import RateResolver
from booking_engine.application.use_cases.reconcile_payment import PaymentReconciliationPoller
from booking_engine.application.use_cases.validate_stay_request import StayRequestValidator
from booking_engine.config import Settings, get_settings
from booking_engine.domain.entities.room_type import RoomType
from booking_engine.infrastructure.gateways.booking_api_client import BookingApiClient
from booking_engine.infrastructure.services.checkout_launcher import BrowserCheckoutLauncher


def build_booking_wizard(
    room_type: RoomType,
    settings: Settings | None = None,
    api_client: BookingApiClient | None = None,
    checkout_launcher: CheckoutLauncher | None = None,
    clock: Clock | None = None,
) -> BookingWizard:
    settings = settings or get_settings()
    clock = clock or SystemClock()
    flow = BookingFlowConfig.from_settings(settings)
    api_client = api_client or BookingApiClient(
        base_url=settings.api_base_url,
        timeout_seconds=settings.http_timeout_seconds,
    )
    return BookingWizard(
        room_type=room_type,
        validator=StayRequestValidator(clock),
        rate_resolver=RateResolver(api_client, room_type),
        booking_gateway=api_client,
        poller=PaymentReconciliationPoller(
            api_client,
            interval_seconds=flow.poll_interval_seconds,
            timeout_seconds=flow.poll_timeout_seconds,
        ),
        checkout_launcher=checkout_launcher or BrowserCheckoutLauncher(),
        availability_provider=api_client,
        clock=clock,
    )

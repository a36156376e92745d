"""
Booking wizard: GuestDetails -> StayDetails -> ReviewAndPay.

Owns the draft for one booking attempt, validates each step before moving
forward, keeps the quote fresh while stay fields change, submits the
booking exactly once per confirmation and hands off to the payment poller.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from booking_engine.application.interfaces.availability_provider import (
    AvailabilityProvider,
    DailyAvailability,
)
from booking_engine.application.interfaces.booking_gateway import BookingGateway, BookingSnapshot
from booking_engine.application.interfaces.checkout_launcher import CheckoutLauncher
from booking_engine.application.interfaces.clock import Clock
from booking_engine.application.use_cases.quote_stay import LatestQuote, RateResolver
from booking_engine.application.use_cases.reconcile_payment import (
    PaymentOutcome,
    PaymentPollState,
    PaymentReconciliationPoller,
    PollHandle,
)
from booking_engine.application.use_cases.validate_stay_request import (
    GUEST_FIELDS,
    STAY_FIELDS,
    StayRequestValidator,
    ValidationResult,
)
from booking_engine.domain.entities.booking_draft import BookingDraft, GuestDetails
from booking_engine.domain.entities.room_type import RoomType
from booking_engine.domain.errors import (
    AvailabilityUnavailableError,
    BookingSubmissionError,
    InvalidWizardStepError,
    ProviderError,
)
from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown

logger = logging.getLogger(__name__)

SUBMISSION_FAILED_MESSAGE = (
    "We could not create your booking. Please try again or contact support."
)
SUBMISSION_REJECTED_MESSAGE = "Please correct the highlighted fields and try again."
AVAILABILITY_FAILED_MESSAGE = "Failed to load availability data"


class WizardStep(int, Enum):
    GUEST_DETAILS = 0
    STAY_DETAILS = 1
    REVIEW_AND_PAY = 2

    @property
    def label(self) -> str:
        return {
            WizardStep.GUEST_DETAILS: "Guest Details",
            WizardStep.STAY_DETAILS: "Stay Details",
            WizardStep.REVIEW_AND_PAY: "Review & Payment",
        }[self]


class GuestKind(str, Enum):
    ADULTS = "adults"
    CHILDREN = "children"


@dataclass(frozen=True)
class BookingFlowConfig:
    poll_interval_seconds: float = 3.0
    poll_timeout_seconds: float | None = 900.0

    @classmethod
    def from_settings(cls, settings) -> "BookingFlowConfig":
        return cls(
            poll_interval_seconds=settings.payment_poll_interval_seconds,
            poll_timeout_seconds=settings.payment_poll_timeout_seconds,
        )


class BookingWizard:
    def __init__(
        self,
        room_type: RoomType,
        validator: StayRequestValidator,
        rate_resolver: RateResolver,
        booking_gateway: BookingGateway,
        poller: PaymentReconciliationPoller,
        checkout_launcher: CheckoutLauncher,
        availability_provider: AvailabilityProvider,
        clock: Clock,
    ) -> None:
        self._room_type = room_type
        self._validator = validator
        self._availability_provider = availability_provider
        self._clock = clock
        self._quote = LatestQuote(rate_resolver)
        self._booking_gateway = booking_gateway
        self._poller = poller
        self._checkout_launcher = checkout_launcher

        self.draft = BookingDraft()
        self.step = WizardStep.GUEST_DETAILS
        self.errors: dict[str, str] = {}
        self.outcome: PaymentOutcome | None = None
        self._is_submitting = False
        self._poll_handle: PollHandle | None = None
        self.availability: dict[date, DailyAvailability] = {}
        self.availability_error: str | None = None

    # === State ===

    @property
    def room_type(self) -> RoomType:
        return self._room_type

    @property
    def is_submitting(self) -> bool:
        return self._is_submitting

    @property
    def is_calculating_price(self) -> bool:
        return self._quote.in_flight

    @property
    def price(self) -> PriceBreakdown:
        return self.draft.price or PriceBreakdown.zero(self._room_type.currency_code)

    @property
    def poll_handle(self) -> PollHandle | None:
        return self._poll_handle

    # === Guest details ===

    def update_guest(self, **changes: str) -> None:
        for name, value in changes.items():
            if name not in GuestDetails.__dataclass_fields__:
                raise ValueError(f"Unknown guest field: {name}")
            setattr(self.draft.guest, name, value)
            self.errors.pop(name, None)

    # === Stay details ===

    async def set_check_in_date(self, value: date | None) -> None:
        stay = self.draft.stay
        stay.check_in_date = value
        # An inverted range is never left in place: force a new check-out pick.
        if value is not None and stay.check_out_date is not None and stay.check_out_date <= value:
            stay.check_out_date = None
        self.errors.pop("check_in_date", None)
        await self._refresh_quote()

    async def set_check_out_date(self, value: date | None) -> None:
        self.draft.stay.check_out_date = value
        self.errors.pop("check_out_date", None)
        await self._refresh_quote()

    async def adjust_guests(self, kind: GuestKind | str, increment: bool) -> bool:
        """
        Steps adults/children up or down by one.

        Refusals are silent no-ops: over maxAdults/maxChildren/maxOccupancy
        on increment, below 1 adult or 0 children on decrement.

        Returns:
            True when the count changed.
        """
        kind = GuestKind(kind)
        stay = self.draft.stay
        adults, children = stay.adults, stay.children

        if increment:
            allowed = (
                self._room_type.can_add_adult(adults, children)
                if kind == GuestKind.ADULTS
                else self._room_type.can_add_child(adults, children)
            )
            if not allowed:
                return False
            delta = 1
        else:
            floor = 1 if kind == GuestKind.ADULTS else 0
            if getattr(stay, kind.value) - 1 < floor:
                return False
            delta = -1

        setattr(stay, kind.value, getattr(stay, kind.value) + delta)
        for name in ("guests", "adults", "children"):
            self.errors.pop(name, None)
        await self._refresh_quote()
        return True

    async def _refresh_quote(self) -> None:
        self.draft.price = None
        request = self.draft.stay.to_request(
            business_unit_id=self._room_type.business_unit_id,
            room_type_id=self._room_type.id,
        )
        if request is None:
            self._quote.invalidate()
            self.draft.price = PriceBreakdown.zero(self._room_type.currency_code)
            return
        breakdown = await self._quote.refresh(request)
        if breakdown is not None:
            self.draft.price = breakdown

    # === Calendar availability ===

    async def load_availability(self, month: date) -> dict[date, DailyAvailability]:
        """
        Loads per-day availability for the calendar month containing `month`.

        Days of the current month before today are skipped and earlier months
        are not requested. A failure only sets `availability_error`; it never
        blocks date selection or navigation.
        """
        today = self._clock.today()
        first_day = month.replace(day=1)
        if first_day < today.replace(day=1):
            return self.availability
        start = max(first_day, today)
        month_end = (first_day + timedelta(days=32)).replace(day=1)

        self.availability_error = None
        try:
            days = await self._availability_provider.get_availability(
                self._room_type.business_unit_id,
                self._room_type.id,
                start,
                month_end,
            )
        except AvailabilityUnavailableError as exc:
            logger.warning(
                "Availability unavailable for calendar",
                extra={
                    "room_type_id": self._room_type.id,
                    "month": first_day.isoformat(),
                    "error_code": exc.code,
                    "error": exc.message,
                },
            )
            # Server-side 4xx messages are meant for the guest.
            client_error = exc.http_status is not None and 400 <= exc.http_status < 500
            self.availability_error = exc.message if client_error else AVAILABILITY_FAILED_MESSAGE
            return self.availability

        self.availability.update({day.date: day for day in days})
        return self.availability

    def is_fully_booked(self, day: date) -> bool:
        entry = self.availability.get(day)
        return entry is not None and entry.available_rooms == 0

    # === Navigation ===

    def _validate_step(self, step: WizardStep) -> ValidationResult:
        if step == WizardStep.GUEST_DETAILS:
            return self._validator.validate_guest(self.draft.guest)
        if step == WizardStep.STAY_DETAILS:
            return self._validator.validate_stay(self.draft.stay, self._room_type)
        return ValidationResult.valid()

    def next(self) -> bool:
        if self.step == WizardStep.REVIEW_AND_PAY:
            raise InvalidWizardStepError(self.step.label, "advance")
        result = self._validate_step(self.step)
        owned = GUEST_FIELDS if self.step == WizardStep.GUEST_DETAILS else STAY_FIELDS
        for name in owned:
            self.errors.pop(name, None)
        self.errors.update(result.errors)
        if not result.is_valid:
            return False
        self.step = WizardStep(self.step + 1)
        return True

    def back(self) -> None:
        if self.step > WizardStep.GUEST_DETAILS:
            self.step = WizardStep(self.step - 1)

    # === Submission ===

    def _snapshot(self, price: PriceBreakdown) -> BookingSnapshot:
        guest, stay = self.draft.guest, self.draft.stay
        return BookingSnapshot(
            business_unit_id=self._room_type.business_unit_id,
            room_type_id=self._room_type.id,
            first_name=guest.first_name.strip(),
            last_name=guest.last_name.strip(),
            email=guest.email.strip(),
            phone=guest.phone.strip(),
            special_requests=guest.special_requests,
            guest_notes=guest.guest_notes,
            check_in_date=stay.check_in_date,
            check_out_date=stay.check_out_date,
            adults=stay.adults,
            children=stay.children,
            nights=price.nights,
            subtotal=price.subtotal,
            taxes=price.taxes,
            service_fee=price.service_fee,
            total_amount=price.total_amount,
        )

    async def submit(self) -> PaymentOutcome | None:
        """
        Creates the booking and starts payment reconciliation.

        Returns None when nothing was sent: a submission already in flight,
        a draft that no longer validates, or a quote still being computed.
        """
        if self.step != WizardStep.REVIEW_AND_PAY:
            raise InvalidWizardStepError(self.step.label, "submit")
        if self._is_submitting:
            logger.info("Ignoring duplicate submit while a submission is pending")
            return None

        result = self._validator.validate(self.draft, self._room_type)
        if not result.is_valid:
            self.errors = dict(result.errors)
            return None
        price = self.draft.price
        if price is None or price.nights <= 0:
            self.errors["price"] = "Price is still being calculated"
            return None

        self._is_submitting = True
        self._stop_polling()
        snapshot = self._snapshot(price)
        try:
            handle = await self._booking_gateway.create_booking_with_payment(snapshot)
        except ProviderError as exc:
            logger.error(
                "Booking submission failed",
                extra={
                    "room_type_id": snapshot.room_type_id,
                    "error_code": exc.code,
                    "http_status": exc.http_status,
                    "error": exc.message,
                },
            )
            message = SUBMISSION_FAILED_MESSAGE
            if isinstance(exc, BookingSubmissionError) and exc.fields:
                self.errors.update(exc.fields)
                message = SUBMISSION_REJECTED_MESSAGE
            self.outcome = PaymentOutcome(status=PaymentPollState.FAILED, message=message)
            return self.outcome
        finally:
            self._is_submitting = False

        logger.info(
            "Booking created, opening checkout",
            extra={
                "booking_id": handle.booking_id,
                "payment_session_id": handle.payment_session_id,
            },
        )
        self._checkout_launcher.open(handle.checkout_url)
        self.outcome = PaymentOutcome.of(
            PaymentPollState.CHECKING,
            handle.payment_session_id,
            reservation_id=handle.booking_id,
        )
        self._poll_handle = self._poller.start(
            handle.payment_session_id, on_update=self._on_payment_update
        )
        return self.outcome

    def _on_payment_update(self, outcome: PaymentOutcome) -> None:
        self.outcome = outcome

    async def wait_for_payment(self) -> PaymentOutcome | None:
        if self._poll_handle is None:
            return self.outcome
        await self._poll_handle.wait()
        return self.outcome

    # === Lifecycle ===

    def _stop_polling(self) -> None:
        if self._poll_handle is not None:
            self._poll_handle.cancel()
            self._poll_handle = None

    def close(self) -> None:
        """Tears the wizard down; no poll survives its view."""
        self._stop_polling()

    async def __aenter__(self) -> "BookingWizard":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable

from booking_engine.application.interfaces.booking_repo import BookingRepo
from booking_engine.application.interfaces.clock import Clock
from booking_engine.application.interfaces.payment_gateway import PaymentGateway
from booking_engine.application.interfaces.payment_session_repo import PaymentSessionRepo
from booking_engine.application.interfaces.transaction_manager import TransactionManager
from booking_engine.domain.entities.booking import Booking, BookingStatus
from booking_engine.domain.entities.payment_session import (
    PaymentSession,
    PaymentSessionStatus,
    map_provider_status,
)
from booking_engine.domain.errors import (
    BookingNotFoundError,
    InvalidBookingStatusError,
    PaymentSessionNotFoundError,
)

STATUS_MESSAGES = {
    PaymentSessionStatus.PENDING: "Payment is still being processed",
    PaymentSessionStatus.PAID: "Payment completed and booking confirmed",
    PaymentSessionStatus.FAILED: "Payment failed",
    PaymentSessionStatus.CANCELLED: "Payment was cancelled or the checkout session expired",
}


@dataclass
class PaymentDetails:
    amount: Decimal
    currency: str
    method: str
    provider: str
    processed_at: datetime | None = None


@dataclass
class PaymentStatusReport:
    status: PaymentSessionStatus
    reservation_id: str
    message: str
    confirmation_number: str | None = None
    payment_details: PaymentDetails | None = None


class GetPaymentStatusUseCase:
    """Reconciles the provider's checkout state into the session and its booking."""

    def __init__(
        self,
        payment_session_repo: PaymentSessionRepo,
        booking_repo: BookingRepo,
        payment_gateway: PaymentGateway,
        transaction_manager: TransactionManager,
        clock: Clock,
        confirmation_generator: Callable[[], str],
    ) -> None:
        self._payment_session_repo = payment_session_repo
        self._booking_repo = booking_repo
        self._payment_gateway = payment_gateway
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._confirmation_generator = confirmation_generator
        self._logger = logging.getLogger(__name__)

    async def execute(self, session_id: str) -> PaymentStatusReport:
        session = await self._payment_session_repo.get(session_id)
        if session is None:
            raise PaymentSessionNotFoundError(session_id)
        booking = await self._booking_repo.get(session.booking_id)
        if booking is None:
            raise BookingNotFoundError(session.booking_id)

        if session.is_terminal:
            return self._report(session, booking)

        checkout = await self._payment_gateway.retrieve_checkout_session(session_id)
        provider_status = map_provider_status(checkout.status, checkout.payment_status)
        method = checkout.payment_method or "card"

        now = self._clock.now()
        if not session.apply_provider_status(provider_status, now):
            return self._report(session, booking, method)

        async with self._transaction_manager.start():
            # Only the request that moves the stored session out of pending
            # touches the booking; concurrent polls lose the update.
            claimed = await self._payment_session_repo.update_if_status(
                session, PaymentSessionStatus.PENDING
            )
            if claimed:
                expected = booking.status
                self._apply_to_booking(booking, provider_status)
                booking.updated_at = now
                if not await self._booking_repo.update_if_status(booking, expected):
                    raise InvalidBookingStatusError(expected.value, booking.status.value)

        if not claimed:
            self._logger.info(
                "Payment session already reconciled by another request",
                extra={"payment_session_id": session_id, "status": provider_status.value},
            )
            return await self._stored_report(session_id, method)

        self._logger.info(
            "Payment session reconciled",
            extra={
                "payment_session_id": session_id,
                "booking_id": booking.id,
                "provider_status": checkout.status,
                "provider_payment_status": checkout.payment_status,
                "status": provider_status.value,
            },
        )
        return self._report(session, booking, method)

    async def _stored_report(self, session_id: str, method: str) -> PaymentStatusReport:
        session = await self._payment_session_repo.get(session_id)
        if session is None:
            raise PaymentSessionNotFoundError(session_id)
        booking = await self._booking_repo.get(session.booking_id)
        if booking is None:
            raise BookingNotFoundError(session.booking_id)
        return self._report(session, booking, method)

    def _apply_to_booking(self, booking: Booking, status: PaymentSessionStatus) -> None:
        if status == PaymentSessionStatus.PAID:
            booking.mark_paid(self._confirmation_generator())
        elif status == PaymentSessionStatus.FAILED:
            booking.mark_failed()
        elif status == PaymentSessionStatus.CANCELLED:
            booking.cancel()

    def _report(
        self, session: PaymentSession, booking: Booking, method: str = "card"
    ) -> PaymentStatusReport:
        details = None
        if session.status == PaymentSessionStatus.PAID:
            details = PaymentDetails(
                amount=session.amount,
                currency=session.currency_code,
                method=method,
                provider=session.provider,
                processed_at=session.processed_at,
            )
        return PaymentStatusReport(
            status=session.status,
            reservation_id=booking.id,
            message=STATUS_MESSAGES[session.status],
            confirmation_number=(
                booking.confirmation_number if booking.status == BookingStatus.PAID else None
            ),
            payment_details=details,
        )

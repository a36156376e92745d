"""
Payment reconciliation poller.

After a checkout session is created the booking flow polls the payment
status endpoint on a fixed interval until the provider reports a terminal
state. Polling runs as an asyncio task behind a PollHandle so it can be
cancelled either on a terminal result or when the consuming view is torn
down.

State machine: checking -> {paid | failed | cancelled}, or checking ->
pending when the max duration elapses without a terminal state.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from booking_engine.application.interfaces.booking_gateway import BookingGateway

logger = logging.getLogger(__name__)


class PaymentPollState(str, Enum):
    CHECKING = "checking"
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (PaymentPollState.PAID, PaymentPollState.FAILED, PaymentPollState.CANCELLED)


OUTCOME_MESSAGES = {
    PaymentPollState.CHECKING: "Please wait while we verify your payment. This may take a few moments.",
    PaymentPollState.PAID: "Your reservation has been confirmed!",
    PaymentPollState.PENDING: (
        "Your payment is still being processed. "
        "You can close this window and check your email for confirmation."
    ),
    PaymentPollState.FAILED: (
        "There was an issue processing your payment. Please try again or contact support."
    ),
    PaymentPollState.CANCELLED: "Your payment was cancelled. You can try booking again.",
}

NEXT_ACTIONS = {
    PaymentPollState.CHECKING: None,
    PaymentPollState.PAID: "view_booking",
    PaymentPollState.PENDING: "check_email",
    PaymentPollState.FAILED: "try_again",
    PaymentPollState.CANCELLED: "try_again",
}


@dataclass(frozen=True)
class PaymentOutcome:
    status: PaymentPollState
    confirmation_number: str | None = None
    payment_session_id: str | None = None
    reservation_id: str | None = None
    message: str = ""

    @property
    def next_action(self) -> str | None:
        return NEXT_ACTIONS[self.status]

    @classmethod
    def of(
        cls,
        status: PaymentPollState,
        payment_session_id: str | None = None,
        confirmation_number: str | None = None,
        reservation_id: str | None = None,
    ) -> "PaymentOutcome":
        return cls(
            status=status,
            confirmation_number=confirmation_number,
            payment_session_id=payment_session_id,
            reservation_id=reservation_id,
            message=OUTCOME_MESSAGES[status],
        )


class PollHandle:
    """Cancellable handle over one polling task."""

    def __init__(self, payment_session_id: str) -> None:
        self.payment_session_id = payment_session_id
        self.outcome = PaymentOutcome.of(PaymentPollState.CHECKING, payment_session_id)
        self.polls = 0
        self._task: asyncio.Task | None = None

    def _attach(self, task: asyncio.Task) -> None:
        self._task = task

    @property
    def done(self) -> bool:
        return self._task is None or self._task.done()

    @property
    def cancelled(self) -> bool:
        return self._task is not None and self._task.cancelled()

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            logger.info(
                "Stopping payment polling",
                extra={"payment_session_id": self.payment_session_id, "polls": self.polls},
            )
            self._task.cancel()

    async def wait(self) -> PaymentOutcome:
        """Waits for the poll to settle; returns the last known outcome if cancelled."""
        if self._task is not None:
            try:
                await asyncio.shield(self._task)
            except asyncio.CancelledError:
                if not self.cancelled:
                    raise
        return self.outcome


class PaymentReconciliationPoller:
    def __init__(
        self,
        booking_gateway: BookingGateway,
        interval_seconds: float = 3.0,
        timeout_seconds: float | None = 900.0,
    ) -> None:
        self._booking_gateway = booking_gateway
        self._interval = interval_seconds
        self._timeout = timeout_seconds

    def start(
        self,
        payment_session_id: str,
        on_update: Callable[[PaymentOutcome], None] | None = None,
    ) -> PollHandle:
        handle = PollHandle(payment_session_id)
        task = asyncio.get_running_loop().create_task(
            self._run(handle, on_update),
            name=f"payment-poll-{payment_session_id}",
        )
        handle._attach(task)
        return handle

    async def _run(
        self,
        handle: PollHandle,
        on_update: Callable[[PaymentOutcome], None] | None,
    ) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._timeout if self._timeout is not None else None
        session_id = handle.payment_session_id

        def settle(outcome: PaymentOutcome) -> None:
            handle.outcome = outcome
            if on_update is not None:
                on_update(outcome)

        while True:
            await asyncio.sleep(self._interval)
            handle.polls += 1
            try:
                result = await self._booking_gateway.get_payment_status(session_id)
            except Exception as exc:
                # An unreachable or malformed status endpoint ends the poll as failed.
                logger.error(
                    "Error polling payment status",
                    exc_info=exc,
                    extra={"payment_session_id": session_id, "polls": handle.polls},
                )
                settle(PaymentOutcome.of(PaymentPollState.FAILED, session_id))
                return

            status = (result.status or "").lower()
            logger.info(
                "Polled payment status",
                extra={"payment_session_id": session_id, "status": status, "polls": handle.polls},
            )
            if status in (
                PaymentPollState.PAID.value,
                PaymentPollState.FAILED.value,
                PaymentPollState.CANCELLED.value,
            ):
                settle(
                    PaymentOutcome.of(
                        PaymentPollState(status),
                        session_id,
                        confirmation_number=result.confirmation_number,
                        reservation_id=result.reservation_id,
                    )
                )
                return

            if deadline is not None and loop.time() >= deadline:
                logger.warning(
                    "Payment polling timed out without a terminal status",
                    extra={"payment_session_id": session_id, "polls": handle.polls},
                )
                settle(
                    PaymentOutcome.of(
                        PaymentPollState.PENDING,
                        session_id,
                        reservation_id=result.reservation_id,
                    )
                )
                return

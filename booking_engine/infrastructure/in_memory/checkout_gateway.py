from decimal import Decimal
from uuid import uuid4

from booking_engine.application.interfaces.payment_gateway import (
    CheckoutSessionResult,
    PaymentGateway,
)
from booking_engine.domain.errors import PaymentProviderError


class StubCheckoutGateway(PaymentGateway):
    """
    Checkout en memoria.

    Las sesiones nacen abiertas; los tests las completan con complete()/expire()
    para simular lo que haría el huésped en la página del proveedor.
    """

    def __init__(self, checkout_base_url: str = "https://checkout.stripe.test/pay") -> None:
        self._checkout_base_url = checkout_base_url
        self.sessions: dict[str, CheckoutSessionResult] = {}
        self.fail_next_create = False

    async def create_checkout_session(
        self,
        booking_id: str,
        description: str,
        amount: Decimal,
        currency: str,
        customer_email: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSessionResult:
        if self.fail_next_create:
            self.fail_next_create = False
            raise PaymentProviderError("Stub checkout unavailable", code="PROVIDER_DOWN")
        session_id = f"cs_test_{uuid4().hex[:24]}"
        result = CheckoutSessionResult(
            session_id=session_id,
            checkout_url=f"{self._checkout_base_url}/{session_id}",
            status="open",
            payment_status="unpaid",
            amount_total=amount,
            currency=currency,
        )
        self.sessions[session_id] = result
        return result

    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSessionResult:
        result = self.sessions.get(session_id)
        if result is None:
            raise PaymentProviderError(f"No such checkout session: {session_id}", code="NOT_FOUND")
        return result

    def complete(self, session_id: str, payment_method: str = "card") -> None:
        session = self.sessions[session_id]
        session.status = "complete"
        session.payment_status = "paid"
        session.payment_method = payment_method

    def expire(self, session_id: str) -> None:
        self.sessions[session_id].status = "expired"

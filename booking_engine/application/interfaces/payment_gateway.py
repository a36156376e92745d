from dataclasses import dataclass
from decimal import Decimal


@dataclass
class CheckoutSessionResult:
    session_id: str
    checkout_url: str | None
    status: str
    payment_status: str
    amount_total: Decimal | None = None
    currency: str | None = None
    payment_method: str | None = None


class PaymentGateway:
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
        raise NotImplementedError

    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSessionResult:
        raise NotImplementedError

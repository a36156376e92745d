import asyncio
import logging
from decimal import Decimal

import stripe

from booking_engine.application.interfaces.payment_gateway import (
    CheckoutSessionResult,
    PaymentGateway,
)
from booking_engine.domain.errors import PaymentProviderError
from booking_engine.infrastructure.circuit_breaker import (
    CircuitBreakerError,
    payment_provider_breaker,
)

logger = logging.getLogger(__name__)

# Stripe cobra en la unidad mínima de la moneda
MINOR_UNITS = Decimal("100")


def _to_minor_units(amount: Decimal) -> int:
    return int((Decimal(amount) * MINOR_UNITS).to_integral_value())


class StripeCheckoutGateway(PaymentGateway):
    def __init__(self, api_key: str, max_network_retries: int = 2) -> None:
        if not api_key:
            raise RuntimeError("STRIPE_SECRET_KEY is required for the Stripe checkout gateway")
        self._api_key = api_key
        stripe.max_network_retries = max_network_retries

    async def _call(self, operation: str, func, **params):
        """
        Runs a blocking Stripe SDK call off the event loop, protected by the
        payment provider circuit breaker.

        Raises:
            PaymentProviderError: circuit open or Stripe API error.
        """
        try:
            with payment_provider_breaker.calling():
                return await asyncio.to_thread(func, api_key=self._api_key, **params)
        except CircuitBreakerError as exc:
            logger.error(
                "Payment provider circuit breaker is open - service unavailable",
                extra={"operation": operation, "circuit_state": str(exc)},
            )
            raise PaymentProviderError(
                "Payment provider temporarily unavailable", code="CIRCUIT_OPEN"
            ) from exc
        except stripe.StripeError as exc:
            logger.error(
                "Stripe API error",
                exc_info=exc,
                extra={"operation": operation, "http_status": exc.http_status},
            )
            raise PaymentProviderError(
                exc.user_message or "Payment provider error",
                code=exc.code or "STRIPE_ERROR",
                http_status=exc.http_status,
            ) from exc

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
        session = await self._call(
            "create_checkout_session",
            stripe.checkout.Session.create,
            mode="payment",
            client_reference_id=booking_id,
            customer_email=customer_email,
            line_items=[
                {
                    "quantity": 1,
                    "price_data": {
                        "currency": currency.lower(),
                        "unit_amount": _to_minor_units(amount),
                        "product_data": {"name": description},
                    },
                }
            ],
            metadata={"booking_id": booking_id},
            success_url=f"{success_url}?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=cancel_url,
            idempotency_key=f"checkout-{booking_id}",
        )
        return self._map_session(session)

    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSessionResult:
        session = await self._call(
            "retrieve_checkout_session",
            stripe.checkout.Session.retrieve,
            id=session_id,
            expand=["payment_intent"],
        )
        return self._map_session(session)

    def _map_session(self, session) -> CheckoutSessionResult:
        amount_total = getattr(session, "amount_total", None)
        payment_method = None
        intent = getattr(session, "payment_intent", None)
        if intent and not isinstance(intent, str):
            types = getattr(intent, "payment_method_types", None) or []
            payment_method = types[0] if types else None
        return CheckoutSessionResult(
            session_id=session.id,
            checkout_url=getattr(session, "url", None),
            status=getattr(session, "status", None) or "open",
            payment_status=getattr(session, "payment_status", None) or "unpaid",
            amount_total=Decimal(amount_total) / MINOR_UNITS if amount_total is not None else None,
            currency=(getattr(session, "currency", None) or "").upper() or None,
            payment_method=payment_method,
        )

import unittest
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import patch

import stripe

from booking_engine.domain.errors import PaymentProviderError
from booking_engine.infrastructure.circuit_breaker import payment_provider_breaker
from booking_engine.infrastructure.gateways.stripe_checkout_gateway import (
    StripeCheckoutGateway,
    _to_minor_units,
)


def _session(**overrides) -> SimpleNamespace:
    fields = {
        "id": "cs_test_123",
        "url": "https://checkout.stripe.com/c/pay/cs_test_123",
        "status": "open",
        "payment_status": "unpaid",
        "amount_total": 244000,
        "currency": "php",
        "payment_intent": None,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


class TestStripeCheckoutGateway(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        payment_provider_breaker.close()
        self.gateway = StripeCheckoutGateway(api_key="sk_test_123")

    def test_requires_api_key(self):
        with self.assertRaises(RuntimeError):
            StripeCheckoutGateway(api_key="")

    def test_amounts_are_sent_in_minor_units(self):
        self.assertEqual(_to_minor_units(Decimal("2440.00")), 244000)
        self.assertEqual(_to_minor_units(Decimal("1199.99")), 119999)

    @patch("stripe.checkout.Session.create")
    async def test_create_checkout_session(self, mock_create):
        mock_create.return_value = _session()

        result = await self.gateway.create_checkout_session(
            booking_id="booking-1",
            description="Standard Room - 2 nights",
            amount=Decimal("2440.00"),
            currency="PHP",
            customer_email="maria@example.com",
            success_url="http://localhost:5173/booking/success",
            cancel_url="http://localhost:5173/booking/cancel",
        )

        self.assertEqual(result.session_id, "cs_test_123")
        self.assertEqual(result.checkout_url, "https://checkout.stripe.com/c/pay/cs_test_123")
        self.assertEqual(result.amount_total, Decimal("2440"))
        self.assertEqual(result.currency, "PHP")
        kwargs = mock_create.call_args.kwargs
        self.assertEqual(kwargs["api_key"], "sk_test_123")
        self.assertEqual(kwargs["client_reference_id"], "booking-1")
        self.assertEqual(kwargs["idempotency_key"], "checkout-booking-1")
        price_data = kwargs["line_items"][0]["price_data"]
        self.assertEqual(price_data["unit_amount"], 244000)
        self.assertEqual(price_data["currency"], "php")
        self.assertEqual(
            kwargs["success_url"],
            "http://localhost:5173/booking/success?session_id={CHECKOUT_SESSION_ID}",
        )

    @patch("stripe.checkout.Session.retrieve")
    async def test_retrieve_maps_payment_method(self, mock_retrieve):
        mock_retrieve.return_value = _session(
            status="complete",
            payment_status="paid",
            payment_intent=SimpleNamespace(payment_method_types=["card"]),
        )

        result = await self.gateway.retrieve_checkout_session("cs_test_123")

        self.assertEqual(result.status, "complete")
        self.assertEqual(result.payment_status, "paid")
        self.assertEqual(result.payment_method, "card")
        self.assertEqual(mock_retrieve.call_args.kwargs["id"], "cs_test_123")
        self.assertEqual(mock_retrieve.call_args.kwargs["expand"], ["payment_intent"])

    @patch("stripe.checkout.Session.retrieve")
    async def test_sparse_session_gets_defaults(self, mock_retrieve):
        mock_retrieve.return_value = SimpleNamespace(id="cs_test_456")

        result = await self.gateway.retrieve_checkout_session("cs_test_456")

        self.assertEqual(result.status, "open")
        self.assertEqual(result.payment_status, "unpaid")
        self.assertIsNone(result.checkout_url)
        self.assertIsNone(result.amount_total)
        self.assertIsNone(result.currency)
        self.assertIsNone(result.payment_method)

    @patch("stripe.checkout.Session.retrieve")
    async def test_unexpanded_intent_has_no_method(self, mock_retrieve):
        mock_retrieve.return_value = _session(payment_intent="pi_123")

        result = await self.gateway.retrieve_checkout_session("cs_test_123")

        self.assertIsNone(result.payment_method)

    @patch("stripe.checkout.Session.create")
    async def test_stripe_error_maps_to_provider_error(self, mock_create):
        mock_create.side_effect = stripe.StripeError(
            "Your card was declined.", http_status=402, code="card_declined"
        )

        with self.assertRaises(PaymentProviderError) as ctx:
            await self.gateway.create_checkout_session(
                booking_id="booking-1",
                description="Standard Room - 2 nights",
                amount=Decimal("2440.00"),
                currency="PHP",
                customer_email="maria@example.com",
                success_url="http://localhost:5173/booking/success",
                cancel_url="http://localhost:5173/booking/cancel",
            )

        self.assertEqual(ctx.exception.code, "card_declined")
        self.assertEqual(ctx.exception.http_status, 402)
        self.assertEqual(ctx.exception.message, "Your card was declined.")

    @patch("stripe.checkout.Session.retrieve")
    async def test_open_circuit_short_circuits(self, mock_retrieve):
        payment_provider_breaker.open()

        with self.assertRaises(PaymentProviderError) as ctx:
            await self.gateway.retrieve_checkout_session("cs_test_123")

        self.assertEqual(ctx.exception.code, "CIRCUIT_OPEN")
        mock_retrieve.assert_not_called()

import unittest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from booking_engine.application.interfaces.booking_gateway import BookingSnapshot
from booking_engine.domain.errors import (
    BookingSubmissionError,
    PaymentStatusUnavailableError,
    PricingUnavailableError,
)
from booking_engine.infrastructure.circuit_breaker import payment_status_breaker, pricing_breaker
from booking_engine.infrastructure.gateways.booking_api_client import BookingApiClient


def _response(status_code: int, body) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.json.return_value = body
    return response


def _mock_client(mock_client_cls, *responses) -> AsyncMock:
    mock_client = AsyncMock()
    mock_client.__aenter__.return_value = mock_client
    mock_client.request.side_effect = list(responses)
    mock_client_cls.return_value = mock_client
    return mock_client


class TestBookingApiClient(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.client = BookingApiClient(base_url="http://api.test/api/", timeout_seconds=2)
        pricing_breaker.close()
        payment_status_breaker.close()
        self.snapshot = BookingSnapshot(
            business_unit_id="bu-1",
            room_type_id="rt-1",
            first_name="Maria",
            last_name="Santos",
            email="maria@example.com",
            phone="123",
            check_in_date=date(2026, 5, 1),
            check_out_date=date(2026, 5, 3),
            adults=2,
            children=0,
            nights=2,
            subtotal=Decimal("2000.00"),
            taxes=Decimal("240.00"),
            service_fee=Decimal("200.00"),
            total_amount=Decimal("2440.00"),
        )

    @patch("httpx.AsyncClient")
    async def test_get_quote_success(self, mock_client_cls):
        mock_client = _mock_client(
            mock_client_cls,
            _response(
                200,
                {
                    "subtotal": 2000,
                    "nights": 2,
                    "taxes": 240,
                    "serviceFee": 200,
                    "totalAmount": 2440,
                    "currency": "PHP",
                },
            ),
        )

        price = await self.client.get_quote("bu-1", "rt-1", date(2026, 5, 1), date(2026, 5, 3), adults=2)

        self.assertEqual(price.total_amount, Decimal("2440.00"))
        self.assertEqual(price.service_fee, Decimal("200.00"))
        call = mock_client.request.call_args
        self.assertEqual(call.args, ("GET", "http://api.test/api/pricing/calculate"))
        self.assertEqual(call.kwargs["params"]["checkInDate"], "2026-05-01")
        self.assertEqual(call.kwargs["params"]["adults"], 2)
        self.assertNotIn("children", call.kwargs["params"])

    @patch("httpx.AsyncClient")
    async def test_get_quote_malformed_body(self, mock_client_cls):
        _mock_client(mock_client_cls, _response(200, {"subtotal": "abc"}))

        with self.assertRaises(PricingUnavailableError) as ctx:
            await self.client.get_quote("bu-1", "rt-1", date(2026, 5, 1), date(2026, 5, 3))
        self.assertEqual(ctx.exception.code, "MALFORMED")

    @patch("httpx.AsyncClient")
    async def test_get_quote_transport_error(self, mock_client_cls):
        mock_client = _mock_client(mock_client_cls)
        mock_client.request.side_effect = httpx.ConnectError("refused")

        with self.assertRaises(PricingUnavailableError) as ctx:
            await self.client.get_quote("bu-1", "rt-1", date(2026, 5, 1), date(2026, 5, 3))
        self.assertEqual(ctx.exception.code, "HTTP_ERROR")

    @patch("httpx.AsyncClient")
    async def test_pricing_circuit_opens_after_repeated_failures(self, mock_client_cls):
        mock_client = _mock_client(mock_client_cls)
        mock_client.request.side_effect = [_response(500, {"error": "boom"})] * 10

        codes = []
        for _ in range(6):
            with self.assertRaises(PricingUnavailableError) as ctx:
                await self.client.get_quote("bu-1", "rt-1", date(2026, 5, 1), date(2026, 5, 3))
            codes.append(ctx.exception.code)

        self.assertEqual(codes[-1], "CIRCUIT_OPEN")
        self.assertEqual(mock_client.request.call_count, 5)

    @patch("httpx.AsyncClient")
    async def test_client_errors_do_not_open_the_circuit(self, mock_client_cls):
        mock_client = _mock_client(mock_client_cls)
        mock_client.request.side_effect = [_response(404, {"detail": "Room type not found or inactive"})] * 7

        for _ in range(7):
            with self.assertRaises(PricingUnavailableError) as ctx:
                await self.client.get_quote("bu-1", "rt-1", date(2026, 5, 1), date(2026, 5, 3))
            self.assertEqual(ctx.exception.http_status, 404)
            self.assertEqual(ctx.exception.message, "Room type not found or inactive")
        self.assertEqual(mock_client.request.call_count, 7)

    @patch("httpx.AsyncClient")
    async def test_create_booking_posts_snapshot(self, mock_client_cls):
        mock_client = _mock_client(
            mock_client_cls,
            _response(
                201,
                {"bookingId": "b-1", "checkoutUrl": "https://pay.test/cs_1", "paymentSessionId": "cs_1"},
            ),
        )

        handle = await self.client.create_booking_with_payment(self.snapshot)

        self.assertEqual(handle.payment_session_id, "cs_1")
        self.assertEqual(handle.booking_id, "b-1")
        payload = mock_client.request.call_args.kwargs["json"]
        self.assertEqual(payload["totalAmount"], "2440.00")
        self.assertEqual(payload["checkOutDate"], "2026-05-03")

    @patch("httpx.AsyncClient")
    async def test_create_booking_validation_error_carries_fields(self, mock_client_cls):
        mock_client = _mock_client(
            mock_client_cls,
            _response(422, {"error": "Validation failed", "fields": {"email": "Please enter a valid email"}}),
        )

        with self.assertRaises(BookingSubmissionError) as ctx:
            await self.client.create_booking_with_payment(self.snapshot)

        self.assertEqual(ctx.exception.http_status, 422)
        self.assertEqual(ctx.exception.fields, {"email": "Please enter a valid email"})
        self.assertEqual(mock_client.request.call_count, 1)

    @patch("httpx.AsyncClient")
    async def test_create_booking_is_not_retried(self, mock_client_cls):
        mock_client = _mock_client(mock_client_cls)
        mock_client.request.side_effect = httpx.ReadTimeout("slow")

        with self.assertRaises(BookingSubmissionError) as ctx:
            await self.client.create_booking_with_payment(self.snapshot)

        self.assertEqual(ctx.exception.code, "TIMEOUT")
        self.assertEqual(mock_client.request.call_count, 1)

    @patch("httpx.AsyncClient")
    async def test_payment_status(self, mock_client_cls):
        mock_client = _mock_client(
            mock_client_cls,
            _response(200, {"status": "paid", "reservationId": "b-1", "confirmationNumber": "CNF123"}),
        )

        result = await self.client.get_payment_status("cs_1")

        self.assertEqual(result.status, "paid")
        self.assertEqual(result.confirmation_number, "CNF123")
        self.assertEqual(mock_client.request.call_args.kwargs["params"], {"sessionId": "cs_1"})

    @patch("httpx.AsyncClient")
    async def test_payment_status_missing_status_is_malformed(self, mock_client_cls):
        _mock_client(mock_client_cls, _response(200, {"reservationId": "b-1"}))

        with self.assertRaises(PaymentStatusUnavailableError):
            await self.client.get_payment_status("cs_1")

    @patch("httpx.AsyncClient")
    async def test_availability(self, mock_client_cls):
        _mock_client(
            mock_client_cls,
            _response(
                200,
                {
                    "isAvailable": True,
                    "availableRooms": 1,
                    "totalRooms": 3,
                    "dailyAvailability": [
                        {"date": "2026-05-01", "availableRooms": 1, "totalRooms": 3},
                        {"date": "2026-05-02", "availableRooms": 2, "totalRooms": 3},
                    ],
                },
            ),
        )

        days = await self.client.get_availability("bu-1", "rt-1", date(2026, 5, 1), date(2026, 5, 3))

        self.assertEqual([d.available_rooms for d in days], [1, 2])
        self.assertEqual(days[0].date, date(2026, 5, 1))


if __name__ == "__main__":
    unittest.main()

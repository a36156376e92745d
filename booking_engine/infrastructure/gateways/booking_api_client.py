"""
HTTP client for the booking API.

Implements the availability, pricing and booking/payment contracts the
booking wizard consumes. Every response is validated against an explicit
schema; anything unexpected (transport error, non-2xx, malformed body)
surfaces as a ProviderError subclass so callers handle a single family of
failures.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaError

from booking_engine.application.interfaces.availability_provider import (
    AvailabilityProvider,
    DailyAvailability,
)
from booking_engine.application.interfaces.booking_gateway import (
    BookingGateway,
    BookingSnapshot,
    CheckoutHandle,
    PaymentStatusResult,
)
from booking_engine.application.interfaces.pricing_provider import PricingProvider
from booking_engine.domain.errors import (
    AvailabilityUnavailableError,
    BookingSubmissionError,
    PaymentStatusUnavailableError,
    PricingUnavailableError,
    ProviderError,
)
from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown
from booking_engine.infrastructure.circuit_breaker import (
    CircuitBreakerError,
    ClientRequestError,
    payment_status_breaker,
    pricing_breaker,
)

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


# === Wire schemas ===


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class DailyAvailabilityWire(_WireModel):
    date: date
    available_rooms: int = Field(alias="availableRooms", ge=0)
    total_rooms: int = Field(alias="totalRooms", ge=0)


class AvailabilityWire(_WireModel):
    is_available: bool = Field(alias="isAvailable")
    available_rooms: int = Field(alias="availableRooms", ge=0)
    total_rooms: int = Field(alias="totalRooms", ge=0)
    daily_availability: list[DailyAvailabilityWire] = Field(
        default_factory=list, alias="dailyAvailability"
    )
    message: str | None = None


class QuoteWire(_WireModel):
    subtotal: Decimal = Field(ge=0)
    nights: int = Field(ge=0)
    taxes: Decimal = Field(ge=0)
    service_fee: Decimal = Field(alias="serviceFee", ge=0)
    total_amount: Decimal = Field(alias="totalAmount", ge=0)
    currency: str = "PHP"


class CheckoutWire(_WireModel):
    booking_id: str | None = Field(default=None, alias="bookingId")
    checkout_url: str = Field(alias="checkoutUrl", min_length=1)
    payment_session_id: str = Field(alias="paymentSessionId", min_length=1)


class PaymentStatusWire(_WireModel):
    status: str
    reservation_id: str | None = Field(default=None, alias="reservationId")
    confirmation_number: str | None = Field(default=None, alias="confirmationNumber")
    message: str | None = None


class ErrorWire(_WireModel):
    error: str | None = None
    detail: Any = None
    fields: dict[str, str] = Field(default_factory=dict)

    @property
    def text(self) -> str:
        if self.error:
            return self.error
        if isinstance(self.detail, str):
            return self.detail
        return "Request failed"


def _error_from(body: Any) -> ErrorWire:
    if not isinstance(body, dict):
        return ErrorWire()
    try:
        return ErrorWire.model_validate(body)
    except SchemaError:
        return ErrorWire(error=str(body.get("error") or "") or None)


def _snapshot_payload(snapshot: BookingSnapshot) -> dict[str, Any]:
    return {
        "businessUnitId": snapshot.business_unit_id,
        "roomTypeId": snapshot.room_type_id,
        "firstName": snapshot.first_name,
        "lastName": snapshot.last_name,
        "email": snapshot.email,
        "phone": snapshot.phone,
        "specialRequests": snapshot.special_requests,
        "guestNotes": snapshot.guest_notes,
        "checkInDate": snapshot.check_in_date.isoformat(),
        "checkOutDate": snapshot.check_out_date.isoformat(),
        "adults": snapshot.adults,
        "children": snapshot.children,
        "nights": snapshot.nights,
        "subtotal": str(snapshot.subtotal),
        "taxes": str(snapshot.taxes),
        "serviceFee": str(snapshot.service_fee),
        "totalAmount": str(snapshot.total_amount),
    }


class BookingApiClient(AvailabilityProvider, PricingProvider, BookingGateway):
    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: Root of the booking API (e.g. http://localhost:8000/api)
            timeout_seconds: Per-request timeout
            transport: Optional httpx transport (e.g. ASGITransport for in-process calls)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        error_cls: type[ProviderError],
        **kwargs: Any,
    ) -> Any:
        url = f"{self._base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            logger.warning("Booking API timeout", extra={"url": url, "timeout": self._timeout})
            raise error_cls("Booking API timed out", code="TIMEOUT") from exc
        except httpx.HTTPError as exc:
            logger.error("Booking API transport error", exc_info=exc, extra={"url": url})
            raise error_cls("Booking API unreachable", code="HTTP_ERROR") from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.is_success:
            error = _error_from(body)
            logger.warning(
                "Booking API returned an error",
                extra={"url": url, "http_status": response.status_code, "error": error.text},
            )
            if error_cls is BookingSubmissionError:
                raise BookingSubmissionError(
                    error.text,
                    code="NON_2XX",
                    http_status=response.status_code,
                    fields=error.fields,
                )
            raise error_cls(error.text, code="NON_2XX", http_status=response.status_code)
        return body

    def _parse(self, schema: type[SchemaT], body: Any, error_cls: type[ProviderError]) -> SchemaT:
        try:
            return schema.model_validate(body)
        except SchemaError as exc:
            logger.error(
                "Malformed booking API response",
                extra={"schema": schema.__name__, "errors": exc.error_count()},
            )
            raise error_cls("Malformed response from booking API", code="MALFORMED") from exc

    async def _guarded(
        self,
        breaker,
        method: str,
        path: str,
        error_cls: type[ProviderError],
        **kwargs: Any,
    ) -> Any:
        try:
            with breaker.calling():
                try:
                    return await self._request(method, path, error_cls, **kwargs)
                except ProviderError as exc:
                    if exc.http_status is not None and 400 <= exc.http_status < 500:
                        # 4xx answers do not count against the circuit.
                        raise ClientRequestError(exc) from exc
                    raise
        except CircuitBreakerError as exc:
            logger.error(
                "Booking API circuit breaker is open - failing fast",
                extra={"path": path, "circuit_state": str(exc)},
            )
            raise error_cls("Booking API temporarily unavailable", code="CIRCUIT_OPEN") from exc
        except ClientRequestError as exc:
            raise exc.error from None

    # === AvailabilityProvider ===

    async def get_availability(
        self,
        business_unit_id: str,
        room_type_id: str,
        from_date: date,
        to_date: date,
    ) -> list[DailyAvailability]:
        body = await self._request(
            "GET",
            "/rooms/availability",
            AvailabilityUnavailableError,
            params={
                "businessUnitId": business_unit_id,
                "roomTypeId": room_type_id,
                "checkInDate": from_date.isoformat(),
                "checkOutDate": to_date.isoformat(),
            },
        )
        wire = self._parse(AvailabilityWire, body, AvailabilityUnavailableError)
        return [
            DailyAvailability(
                date=day.date,
                available_rooms=day.available_rooms,
                total_rooms=day.total_rooms,
            )
            for day in wire.daily_availability
        ]

    # === PricingProvider ===

    async def get_quote(
        self,
        business_unit_id: str,
        room_type_id: str,
        check_in_date: date,
        check_out_date: date,
        adults: int | None = None,
        children: int | None = None,
    ) -> PriceBreakdown:
        params: dict[str, Any] = {
            "businessUnitId": business_unit_id,
            "roomTypeId": room_type_id,
            "checkInDate": check_in_date.isoformat(),
            "checkOutDate": check_out_date.isoformat(),
        }
        if adults is not None:
            params["adults"] = adults
        if children is not None:
            params["children"] = children

        body = await self._guarded(
            pricing_breaker, "GET", "/pricing/calculate", PricingUnavailableError, params=params
        )
        wire = self._parse(QuoteWire, body, PricingUnavailableError)
        try:
            return PriceBreakdown(
                nights=wire.nights,
                subtotal=wire.subtotal,
                taxes=wire.taxes,
                service_fee=wire.service_fee,
                total_amount=wire.total_amount,
                currency_code=wire.currency,
            )
        except ValueError as exc:
            raise PricingUnavailableError(str(exc), code="MALFORMED") from exc

    # === BookingGateway ===

    async def create_booking_with_payment(self, snapshot: BookingSnapshot) -> CheckoutHandle:
        # Not guarded nor retried: a second attempt could create a second booking.
        body = await self._request(
            "POST",
            "/booking/create-with-payment",
            BookingSubmissionError,
            json=_snapshot_payload(snapshot),
        )
        wire = self._parse(CheckoutWire, body, BookingSubmissionError)
        return CheckoutHandle(
            checkout_url=wire.checkout_url,
            payment_session_id=wire.payment_session_id,
            booking_id=wire.booking_id,
        )

    async def get_payment_status(self, payment_session_id: str) -> PaymentStatusResult:
        body = await self._guarded(
            payment_status_breaker,
            "GET",
            "/booking/payment-status",
            PaymentStatusUnavailableError,
            params={"sessionId": payment_session_id},
        )
        wire = self._parse(PaymentStatusWire, body, PaymentStatusUnavailableError)
        return PaymentStatusResult(
            status=wire.status,
            confirmation_number=wire.confirmation_number,
            reservation_id=wire.reservation_id,
            message=wire.message,
        )

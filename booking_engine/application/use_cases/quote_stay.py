import logging
from datetime import date

from booking_engine.application.interfaces.pricing_provider import PricingProvider
from booking_engine.domain.entities.booking_draft import StayRequest
from booking_engine.domain.entities.room_type import RoomType
from booking_engine.domain.errors import ProviderError
from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown
from booking_engine.domain.value_objects.stay_dates import nights_between

logger = logging.getLogger(__name__)


class RateResolver:
    """
    Computes the price breakdown shown to the guest.

    The pricing provider is authoritative for taxes and fees. When it cannot
    be reached the resolver degrades to base rate x nights, flagged as an
    estimate, so the guest always sees a number.
    """

    def __init__(self, pricing_provider: PricingProvider, room_type: RoomType) -> None:
        self._pricing_provider = pricing_provider
        self._room_type = room_type

    async def quote(
        self,
        business_unit_id: str,
        room_type_id: str,
        check_in_date: date,
        check_out_date: date,
        adults: int | None = None,
        children: int | None = None,
    ) -> PriceBreakdown:
        currency = self._room_type.currency_code
        nights = nights_between(check_in_date, check_out_date)
        if nights <= 0:
            return PriceBreakdown.zero(currency)

        try:
            return await self._pricing_provider.get_quote(
                business_unit_id=business_unit_id,
                room_type_id=room_type_id,
                check_in_date=check_in_date,
                check_out_date=check_out_date,
                adults=adults,
                children=children,
            )
        except ProviderError as exc:
            logger.warning(
                "Pricing provider unavailable, using base-rate fallback",
                extra={
                    "room_type_id": room_type_id,
                    "nights": nights,
                    "error_code": exc.code,
                    "error": exc.message,
                },
            )
            return PriceBreakdown.fallback(self._room_type.base_rate, nights, currency)

    async def quote_request(self, request: StayRequest) -> PriceBreakdown:
        return await self.quote(
            business_unit_id=request.business_unit_id,
            room_type_id=request.room_type_id,
            check_in_date=request.check_in_date,
            check_out_date=request.check_out_date,
            adults=request.adults,
            children=request.children,
        )


class LatestQuote:
    """
    Keeps the most recently requested quote.

    Each request is tagged with a generation; a result that comes back after
    a newer request was issued is discarded, whatever the completion order.
    """

    def __init__(self, resolver: RateResolver) -> None:
        self._resolver = resolver
        self._generation = 0
        self._pending: int | None = None
        self.current: PriceBreakdown | None = None

    @property
    def in_flight(self) -> bool:
        return self._pending is not None

    def invalidate(self) -> None:
        self._generation += 1
        self._pending = None
        self.current = None

    async def refresh(self, request: StayRequest) -> PriceBreakdown | None:
        """Returns the new breakdown, or None when a newer request superseded this one."""
        self._generation += 1
        generation = self._generation
        self._pending = generation
        self.current = None

        try:
            breakdown = await self._resolver.quote_request(request)
        finally:
            if generation == self._generation:
                self._pending = None

        if generation != self._generation:
            logger.debug(
                "Discarding stale quote",
                extra={"generation": generation, "latest_generation": self._generation},
            )
            return None
        self.current = breakdown
        return breakdown

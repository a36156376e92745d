from datetime import date

from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown


class PricingProvider:
    """Source of truth for tax and fee rules. Read-only and idempotent."""

    async def get_quote(
        self,
        business_unit_id: str,
        room_type_id: str,
        check_in_date: date,
        check_out_date: date,
        adults: int | None = None,
        children: int | None = None,
    ) -> PriceBreakdown:
        raise NotImplementedError

from datetime import date
from decimal import Decimal

from booking_engine.application.interfaces.room_type_repo import RoomTypeRepo
from booking_engine.domain.errors import RoomTypeNotFoundError
from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown, to_amount
from booking_engine.domain.value_objects.stay_dates import nights_between


class CalculatePricingUseCase:
    """Authoritative quote: base rate, occupancy surcharges, taxes and service fee."""

    def __init__(
        self,
        room_type_repo: RoomTypeRepo,
        tax_rate: Decimal,
        service_fee_rate: Decimal,
    ) -> None:
        self._room_type_repo = room_type_repo
        self._tax_rate = Decimal(str(tax_rate))
        self._service_fee_rate = Decimal(str(service_fee_rate))

    async def execute(
        self,
        business_unit_id: str,
        room_type_id: str,
        check_in_date: date,
        check_out_date: date,
        adults: int | None = None,
        children: int | None = None,
    ) -> PriceBreakdown:
        room_type = await self._room_type_repo.get(business_unit_id, room_type_id)
        if room_type is None:
            raise RoomTypeNotFoundError(business_unit_id, room_type_id)

        nights = nights_between(check_in_date, check_out_date)
        if nights <= 0:
            return PriceBreakdown.zero(room_type.currency_code)

        nightly = to_amount(room_type.base_rate)
        if adults is not None or children is not None:
            nightly += room_type.nightly_surcharge(adults or 1, children or 0)
        subtotal = nightly * nights

        return PriceBreakdown(
            nights=nights,
            subtotal=subtotal,
            taxes=to_amount(subtotal * self._tax_rate),
            service_fee=to_amount(subtotal * self._service_fee_rate),
            currency_code=room_type.currency_code,
        )

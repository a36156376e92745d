from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from booking_engine.api.dependencies import get_use_cases
from booking_engine.api.schemas.booking import PricingResponse
from booking_engine.domain.errors import RoomTypeNotFoundError

router = APIRouter()


@router.get(
    "/pricing/calculate",
    response_model=PricingResponse,
    status_code=status.HTTP_200_OK,
)
async def calculate_pricing(
    business_unit_id: str = Query(alias="businessUnitId", min_length=1),
    room_type_id: str = Query(alias="roomTypeId", min_length=1),
    check_in_date: date = Query(alias="checkInDate"),
    check_out_date: date = Query(alias="checkOutDate"),
    adults: int | None = Query(default=None, ge=1),
    children: int | None = Query(default=None, ge=0),
    use_cases=Depends(get_use_cases),
) -> PricingResponse:
    try:
        breakdown = await use_cases["calculate_pricing"].execute(
            business_unit_id=business_unit_id,
            room_type_id=room_type_id,
            check_in_date=check_in_date,
            check_out_date=check_out_date,
            adults=adults,
            children=children,
        )
    except RoomTypeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc

    return PricingResponse(
        subtotal=breakdown.subtotal,
        nights=breakdown.nights,
        taxes=breakdown.taxes,
        service_fee=breakdown.service_fee,
        total_amount=breakdown.total_amount,
        currency=breakdown.currency_code,
    )

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from booking_engine.api.dependencies import get_use_cases
from booking_engine.api.schemas.booking import (
    AvailabilityResponse,
    DailyAvailabilityResponse,
    RequestedDates,
)
from booking_engine.domain.errors import InvalidDateRangeError, RoomTypeNotFoundError

router = APIRouter()


@router.get(
    "/rooms/availability",
    response_model=AvailabilityResponse,
    status_code=status.HTTP_200_OK,
)
async def get_room_availability(
    business_unit_id: str = Query(alias="businessUnitId", min_length=1),
    room_type_id: str = Query(alias="roomTypeId", min_length=1),
    check_in_date: date = Query(alias="checkInDate"),
    check_out_date: date = Query(alias="checkOutDate"),
    use_cases=Depends(get_use_cases),
) -> AvailabilityResponse:
    try:
        report = await use_cases["check_availability"].execute(
            business_unit_id=business_unit_id,
            room_type_id=room_type_id,
            check_in_date=check_in_date,
            check_out_date=check_out_date,
        )
    except InvalidDateRangeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    except RoomTypeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc

    requested = None
    if report.check_in_date and report.check_out_date:
        requested = RequestedDates(
            check_in=report.check_in_date,
            check_out=report.check_out_date,
            nights=report.nights,
        )
    return AvailabilityResponse(
        is_available=report.is_available,
        available_rooms=report.available_rooms,
        total_rooms=report.total_rooms,
        requested_dates=requested,
        daily_availability=[
            DailyAvailabilityResponse(
                date=day.date,
                available_rooms=day.available_rooms,
                total_rooms=day.total_rooms,
            )
            for day in report.daily_availability
        ],
        message=report.message,
    )

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from booking_engine.api.dependencies import get_use_cases
from booking_engine.api.schemas.booking import (
    BookingConfirmationResponse,
    CreateBookingWithPaymentRequest,
    CreateBookingWithPaymentResponse,
    PaymentDetailsResponse,
    PaymentStatusResponse,
    ValidationErrorResponse,
)
from booking_engine.application.interfaces.booking_gateway import BookingSnapshot
from booking_engine.domain.errors import (
    BookingNotFoundError,
    ConfirmationNotFoundError,
    PaymentProviderError,
    PaymentSessionNotFoundError,
    RoomTypeNotFoundError,
    ValidationError,
)

router = APIRouter()


@router.post(
    "/booking/create-with-payment",
    response_model=CreateBookingWithPaymentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ValidationErrorResponse}},
)
async def create_booking_with_payment(
    payload: CreateBookingWithPaymentRequest,
    use_cases=Depends(get_use_cases),
):
    snapshot = BookingSnapshot(
        business_unit_id=payload.business_unit_id,
        room_type_id=payload.room_type_id,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        phone=payload.phone,
        special_requests=payload.special_requests,
        guest_notes=payload.guest_notes,
        check_in_date=payload.check_in_date,
        check_out_date=payload.check_out_date,
        adults=payload.adults,
        children=payload.children,
        nights=payload.nights,
        subtotal=payload.subtotal,
        taxes=payload.taxes,
        service_fee=payload.service_fee,
        total_amount=payload.total_amount,
    )
    try:
        handle = await use_cases["create_booking_with_payment"].execute(snapshot)
    except ValidationError as exc:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"error": "Validation failed", "fields": exc.fields},
        )
    except RoomTypeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
    except PaymentProviderError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Payment provider unavailable, please try again",
        ) from exc

    return CreateBookingWithPaymentResponse(
        booking_id=handle.booking_id,
        checkout_url=handle.checkout_url,
        payment_session_id=handle.payment_session_id,
    )


@router.get(
    "/booking/payment-status",
    response_model=PaymentStatusResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def get_payment_status(
    session_id: str = Query(alias="sessionId", min_length=1),
    use_cases=Depends(get_use_cases),
) -> PaymentStatusResponse:
    try:
        report = await use_cases["get_payment_status"].execute(session_id)
    except (PaymentSessionNotFoundError, BookingNotFoundError) as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
    except PaymentProviderError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Payment provider unavailable, please try again",
        ) from exc

    details = None
    if report.payment_details is not None:
        details = PaymentDetailsResponse(
            amount=report.payment_details.amount,
            currency=report.payment_details.currency,
            method=report.payment_details.method,
            provider=report.payment_details.provider,
            processed_at=report.payment_details.processed_at,
        )
    return PaymentStatusResponse(
        status=report.status.value,
        reservation_id=report.reservation_id,
        confirmation_number=report.confirmation_number,
        message=report.message,
        payment_details=details,
    )


@router.get(
    "/booking/confirmation/{confirmation_number}",
    response_model=BookingConfirmationResponse,
    status_code=status.HTTP_200_OK,
)
async def get_booking_confirmation(
    confirmation_number: str,
    use_cases=Depends(get_use_cases),
) -> BookingConfirmationResponse:
    try:
        confirmation = await use_cases["get_booking_confirmation"].execute(confirmation_number)
    except ConfirmationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc

    return BookingConfirmationResponse(
        confirmation_number=confirmation.confirmation_number,
        guest_full_name=confirmation.guest_full_name,
        room_type_name=confirmation.room_type_name,
        check_in_date=confirmation.check_in_date,
        check_out_date=confirmation.check_out_date,
        nights=confirmation.nights,
        total_amount=confirmation.total_amount,
        currency=confirmation.currency_code,
    )

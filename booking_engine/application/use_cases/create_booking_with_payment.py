import logging
from typing import Callable

from booking_engine.application.interfaces.booking_gateway import BookingSnapshot, CheckoutHandle
from booking_engine.application.interfaces.booking_repo import BookingRepo
from booking_engine.application.interfaces.clock import Clock
from booking_engine.application.interfaces.payment_gateway import PaymentGateway
from booking_engine.application.interfaces.payment_session_repo import PaymentSessionRepo
from booking_engine.application.interfaces.room_type_repo import RoomTypeRepo
from booking_engine.application.interfaces.transaction_manager import TransactionManager
from booking_engine.application.use_cases.validate_stay_request import StayRequestValidator
from booking_engine.domain.entities.booking import Booking
from booking_engine.domain.entities.booking_draft import GuestDetails, StayDetails
from booking_engine.domain.entities.payment_session import PaymentSession
from booking_engine.domain.errors import (
    PaymentProviderError,
    RoomTypeNotFoundError,
    ValidationError,
)
from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown
from booking_engine.domain.value_objects.stay_dates import nights_between


class CreateBookingWithPaymentUseCase:
    def __init__(
        self,
        room_type_repo: RoomTypeRepo,
        booking_repo: BookingRepo,
        payment_session_repo: PaymentSessionRepo,
        payment_gateway: PaymentGateway,
        transaction_manager: TransactionManager,
        validator: StayRequestValidator,
        clock: Clock,
        id_generator: Callable[[], str],
        success_url: str,
        cancel_url: str,
    ) -> None:
        self._room_type_repo = room_type_repo
        self._booking_repo = booking_repo
        self._payment_session_repo = payment_session_repo
        self._payment_gateway = payment_gateway
        self._transaction_manager = transaction_manager
        self._validator = validator
        self._clock = clock
        self._id_generator = id_generator
        self._success_url = success_url
        self._cancel_url = cancel_url
        self._logger = logging.getLogger(__name__)

    def _confirmed_price(self, snapshot: BookingSnapshot, currency_code: str) -> PriceBreakdown:
        errors: dict[str, str] = {}
        if snapshot.nights != nights_between(snapshot.check_in_date, snapshot.check_out_date):
            errors["nights"] = "Nights do not match the selected dates"
        try:
            price = PriceBreakdown(
                nights=snapshot.nights,
                subtotal=snapshot.subtotal,
                taxes=snapshot.taxes,
                service_fee=snapshot.service_fee,
                total_amount=snapshot.total_amount,
                currency_code=currency_code,
            )
        except ValueError as exc:
            errors["total_amount"] = str(exc)
            raise ValidationError(errors) from exc
        if price.total_amount != price.subtotal + price.taxes + price.service_fee:
            errors["total_amount"] = "Total must equal subtotal plus taxes and service fee"
        if errors:
            raise ValidationError(errors)
        return price

    async def execute(self, snapshot: BookingSnapshot) -> CheckoutHandle:
        room_type = await self._room_type_repo.get(
            snapshot.business_unit_id, snapshot.room_type_id
        )
        if room_type is None:
            raise RoomTypeNotFoundError(snapshot.business_unit_id, snapshot.room_type_id)

        guest = GuestDetails(
            first_name=snapshot.first_name,
            last_name=snapshot.last_name,
            email=snapshot.email,
            phone=snapshot.phone,
        )
        stay = StayDetails(
            check_in_date=snapshot.check_in_date,
            check_out_date=snapshot.check_out_date,
            adults=snapshot.adults,
            children=snapshot.children,
        )
        result = self._validator.validate_guest(guest).merge(
            self._validator.validate_stay(stay, room_type)
        )
        if not result.is_valid:
            raise ValidationError(result.errors)
        price = self._confirmed_price(snapshot, room_type.currency_code)

        now = self._clock.now()
        booking = Booking(
            id=self._id_generator(),
            business_unit_id=snapshot.business_unit_id,
            room_type_id=snapshot.room_type_id,
            first_name=snapshot.first_name,
            last_name=snapshot.last_name,
            email=snapshot.email,
            phone=snapshot.phone,
            special_requests=snapshot.special_requests,
            guest_notes=snapshot.guest_notes,
            check_in_date=snapshot.check_in_date,
            check_out_date=snapshot.check_out_date,
            adults=snapshot.adults,
            children=snapshot.children,
            nights=price.nights,
            subtotal=price.subtotal,
            taxes=price.taxes,
            service_fee=price.service_fee,
            total_amount=price.total_amount,
            currency_code=price.currency_code,
            created_at=now,
            updated_at=now,
        )

        # The provider call happens before anything is written: a failure
        # leaves no booking behind.
        checkout = await self._payment_gateway.create_checkout_session(
            booking_id=booking.id,
            description=f"{room_type.display_name} ({price.nights} night(s))",
            amount=price.total_amount,
            currency=price.currency_code,
            customer_email=snapshot.email,
            success_url=self._success_url,
            cancel_url=self._cancel_url,
        )
        if not checkout.checkout_url:
            raise PaymentProviderError(
                "Payment provider returned no checkout URL", code="NO_CHECKOUT_URL"
            )

        async with self._transaction_manager.start():
            await self._booking_repo.create(booking)
            await self._payment_session_repo.create(
                PaymentSession(
                    session_id=checkout.session_id,
                    booking_id=booking.id,
                    checkout_url=checkout.checkout_url,
                    amount=price.total_amount,
                    currency_code=price.currency_code,
                    created_at=now,
                    updated_at=now,
                )
            )
            booking.mark_payment_pending(checkout.session_id)
            await self._booking_repo.update(booking)

        self._logger.info(
            "Booking created with payment session",
            extra={
                "booking_id": booking.id,
                "payment_session_id": checkout.session_id,
                "total_amount": str(price.total_amount),
                "currency": price.currency_code,
            },
        )
        return CheckoutHandle(
            checkout_url=checkout.checkout_url,
            payment_session_id=checkout.session_id,
            booking_id=booking.id,
        )

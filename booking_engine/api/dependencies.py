from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.api.deps import AsyncSessionLocal
from booking_engine.application.interfaces.clock import SystemClock
from booking_engine.application.use_cases.calculate_pricing import CalculatePricingUseCase
from booking_engine.application.use_cases.check_availability import CheckAvailabilityUseCase
from booking_engine.application.use_cases.create_booking_with_payment import (
    CreateBookingWithPaymentUseCase,
)
from booking_engine.application.use_cases.get_booking_confirmation import (
    GetBookingConfirmationUseCase,
)
from booking_engine.application.use_cases.get_payment_status import GetPaymentStatusUseCase
from booking_engine.application.use_cases.validate_stay_request import StayRequestValidator
from booking_engine.config import Settings, get_settings
from booking_engine.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from booking_engine.infrastructure.db.repositories.payment_session_repo_sql import (
    PaymentSessionRepoSQL,
)
from booking_engine.infrastructure.db.repositories.room_type_repo_sql import RoomTypeRepoSQL
from booking_engine.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from booking_engine.infrastructure.demo_catalog import DEMO_ROOM_TYPE, DEMO_ROOMS
from booking_engine.infrastructure.gateways.stripe_checkout_gateway import StripeCheckoutGateway
from booking_engine.infrastructure.in_memory import (
    InMemoryBookingRepo,
    InMemoryPaymentSessionRepo,
    InMemoryRoomTypeRepo,
    InMemoryTransactionManager,
    StubCheckoutGateway,
)
from booking_engine.infrastructure.services.code_generator import (
    generate_booking_id,
    generate_confirmation_number,
)


async def get_session(settings: Settings = Depends(get_settings)) -> AsyncSession | None:
    if settings.use_in_memory:
        yield None
        return
    async with AsyncSessionLocal() as session:
        yield session


@lru_cache(maxsize=1)
def _in_memory_bundle():
    room_type_repo = InMemoryRoomTypeRepo()
    room_type_repo.add_room_type(DEMO_ROOM_TYPE, DEMO_ROOMS)
    return {
        "room_type_repo": room_type_repo,
        "booking_repo": InMemoryBookingRepo(),
        "payment_session_repo": InMemoryPaymentSessionRepo(),
        "payment_gateway": StubCheckoutGateway(),
        "tx_manager": InMemoryTransactionManager(),
    }


def _build_use_cases(settings: Settings, bundle: dict) -> dict:
    clock = SystemClock()
    return {
        "check_availability": CheckAvailabilityUseCase(
            room_type_repo=bundle["room_type_repo"],
            booking_repo=bundle["booking_repo"],
            clock=clock,
        ),
        "calculate_pricing": CalculatePricingUseCase(
            room_type_repo=bundle["room_type_repo"],
            tax_rate=settings.tax_rate,
            service_fee_rate=settings.service_fee_rate,
        ),
        "create_booking_with_payment": CreateBookingWithPaymentUseCase(
            room_type_repo=bundle["room_type_repo"],
            booking_repo=bundle["booking_repo"],
            payment_session_repo=bundle["payment_session_repo"],
            payment_gateway=bundle["payment_gateway"],
            transaction_manager=bundle["tx_manager"],
            validator=StayRequestValidator(clock),
            clock=clock,
            id_generator=generate_booking_id,
            success_url=settings.checkout_success_url,
            cancel_url=settings.checkout_cancel_url,
        ),
        "get_payment_status": GetPaymentStatusUseCase(
            payment_session_repo=bundle["payment_session_repo"],
            booking_repo=bundle["booking_repo"],
            payment_gateway=bundle["payment_gateway"],
            transaction_manager=bundle["tx_manager"],
            clock=clock,
            confirmation_generator=generate_confirmation_number,
        ),
        "get_booking_confirmation": GetBookingConfirmationUseCase(
            booking_repo=bundle["booking_repo"],
            room_type_repo=bundle["room_type_repo"],
        ),
    }


def get_use_cases(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
):
    if settings.use_in_memory:
        return _build_use_cases(settings, _in_memory_bundle())

    if not session:
        raise RuntimeError("DB session not available")

    return _build_use_cases(
        settings,
        {
            "room_type_repo": RoomTypeRepoSQL(session),
            "booking_repo": BookingRepoSQL(session),
            "payment_session_repo": PaymentSessionRepoSQL(session),
            "payment_gateway": StripeCheckoutGateway(api_key=settings.stripe_secret_key),
            "tx_manager": SQLAlchemyTransactionManager(session),
        },
    )

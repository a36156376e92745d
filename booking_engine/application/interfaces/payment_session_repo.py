from booking_engine.domain.entities.payment_session import PaymentSession, PaymentSessionStatus


class PaymentSessionRepo:
    async def create(self, session: PaymentSession) -> PaymentSession:
        raise NotImplementedError

    async def get(self, session_id: str) -> PaymentSession | None:
        raise NotImplementedError

    async def update_if_status(
        self, session: PaymentSession, expected: PaymentSessionStatus
    ) -> bool:
        """Writes the session only if the stored status is still `expected`."""
        raise NotImplementedError

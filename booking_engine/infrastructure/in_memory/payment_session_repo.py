from copy import deepcopy

from booking_engine.application.interfaces.payment_session_repo import PaymentSessionRepo
from booking_engine.domain.entities.payment_session import PaymentSession, PaymentSessionStatus


class InMemoryPaymentSessionRepo(PaymentSessionRepo):
    def __init__(self) -> None:
        self.sessions: dict[str, PaymentSession] = {}

    async def create(self, session: PaymentSession) -> PaymentSession:
        if session.session_id in self.sessions:
            raise ValueError("Payment session already exists")
        self.sessions[session.session_id] = deepcopy(session)
        return session

    async def get(self, session_id: str) -> PaymentSession | None:
        session = self.sessions.get(session_id)
        return deepcopy(session) if session else None

    async def update_if_status(
        self, session: PaymentSession, expected: PaymentSessionStatus
    ) -> bool:
        stored = self.sessions.get(session.session_id)
        if stored is None or stored.status != expected:
            return False
        self.sessions[session.session_id] = deepcopy(session)
        return True

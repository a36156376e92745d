from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.application.interfaces.payment_session_repo import PaymentSessionRepo
from booking_engine.domain.entities.payment_session import PaymentSession, PaymentSessionStatus
from booking_engine.infrastructure.db.tables import payment_sessions


class PaymentSessionRepoSQL(PaymentSessionRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, session: PaymentSession) -> PaymentSession:
        stmt = insert(payment_sessions).values(
            session_id=session.session_id,
            booking_id=session.booking_id,
            checkout_url=session.checkout_url,
            amount=session.amount,
            currency_code=session.currency_code,
            provider=session.provider,
            status=session.status.value,
            created_at=session.created_at,
            updated_at=session.updated_at,
            processed_at=session.processed_at,
        )
        await self._session.execute(stmt)
        return session

    async def get(self, session_id: str) -> PaymentSession | None:
        stmt = select(payment_sessions).where(payment_sessions.c.session_id == session_id)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return PaymentSession(
            session_id=row["session_id"],
            booking_id=row["booking_id"],
            checkout_url=row["checkout_url"],
            amount=row["amount"],
            currency_code=row["currency_code"],
            provider=row["provider"],
            status=PaymentSessionStatus(row["status"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            processed_at=row["processed_at"],
        )

    async def update_if_status(
        self, session: PaymentSession, expected: PaymentSessionStatus
    ) -> bool:
        stmt = (
            update(payment_sessions)
            .where(
                payment_sessions.c.session_id == session.session_id,
                payment_sessions.c.status == expected.value,
            )
            .values(
                status=session.status.value,
                updated_at=session.updated_at,
                processed_at=session.processed_at,
            )
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

"""Entidad PaymentSession - manejador de la sesión de cobro del proveedor externo."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from booking_engine.domain.value_objects.price_breakdown import ZERO


class PaymentSessionStatus(str, Enum):
    """Espejo del estado del proveedor, consultado por polling (no push)."""

    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (
            PaymentSessionStatus.PAID,
            PaymentSessionStatus.FAILED,
            PaymentSessionStatus.CANCELLED,
        )


# Estados de Stripe Checkout: status in {open, complete, expired},
# payment_status in {paid, unpaid, no_payment_required}
PROVIDER_FAILED_STATES = ("failed", "canceled", "requires_payment_method")


def map_provider_status(status: str | None, payment_status: str | None) -> PaymentSessionStatus:
    """
    Traduce el estado del proveedor de pagos al estado de la sesión.

    - complete + paid/no_payment_required -> PAID
    - expired -> CANCELLED
    - fallo explícito -> FAILED
    - cualquier otro -> PENDING
    """
    status = (status or "").lower()
    payment_status = (payment_status or "").lower()

    if status == "complete" and payment_status in ("paid", "no_payment_required"):
        return PaymentSessionStatus.PAID
    if status == "expired":
        return PaymentSessionStatus.CANCELLED
    if status in PROVIDER_FAILED_STATES or payment_status in PROVIDER_FAILED_STATES:
        return PaymentSessionStatus.FAILED
    return PaymentSessionStatus.PENDING


@dataclass
class PaymentSession:
    """
    Sesión de cobro asociada uno-a-uno con una reserva.

    Se crea en la misma transacción que la reserva.
    """

    session_id: str
    booking_id: str
    checkout_url: str
    amount: Decimal = ZERO
    currency_code: str = "PHP"
    provider: str = "stripe"
    status: PaymentSessionStatus = PaymentSessionStatus.PENDING
    created_at: datetime | None = None
    updated_at: datetime | None = None
    processed_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def apply_provider_status(self, status: PaymentSessionStatus, at: datetime) -> bool:
        """
        Actualiza el espejo del estado; un estado terminal nunca cambia.

        Returns:
            True si hubo transición.
        """
        if self.is_terminal or status == self.status:
            return False
        self.status = status
        self.updated_at = at
        if status.is_terminal:
            self.processed_at = at
        return True

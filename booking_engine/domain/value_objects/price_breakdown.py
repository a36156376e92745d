"""Value Object PriceBreakdown - desglose de precio de una estancia."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def to_amount(value: Decimal | int | float | str) -> Decimal:
    """Normaliza un monto a Decimal con 2 decimales (redondeo half-up)."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PriceBreakdown:
    """
    Value Object inmutable con el desglose de una cotización.

    Se recalcula desde cero ante cualquier cambio de fechas u ocupación;
    nunca se parchea incrementalmente.

    Attributes:
        nights: Noches cotizadas.
        subtotal: Tarifa base por noches (más recargos si aplican).
        taxes: Impuestos calculados por el proveedor (0 si no los reporta).
        service_fee: Cargo por servicio (0 si no lo reporta).
        total_amount: subtotal + taxes + service_fee.
        is_estimate: True cuando proviene del cálculo de respaldo local.
    """

    nights: int
    subtotal: Decimal
    taxes: Decimal = ZERO
    service_fee: Decimal = ZERO
    total_amount: Decimal | None = None
    currency_code: str = "PHP"
    is_estimate: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "subtotal", to_amount(self.subtotal))
        object.__setattr__(self, "taxes", to_amount(self.taxes))
        object.__setattr__(self, "service_fee", to_amount(self.service_fee))
        if self.total_amount is None:
            total = self.subtotal + self.taxes + self.service_fee
        else:
            total = to_amount(self.total_amount)
        object.__setattr__(self, "total_amount", total)

        if self.nights < 0:
            raise ValueError(f"nights cannot be negative: {self.nights}")
        for name in ("subtotal", "taxes", "service_fee", "total_amount"):
            if getattr(self, name) < ZERO:
                raise ValueError(f"{name} cannot be negative: {getattr(self, name)}")
        if self.total_amount < self.subtotal:
            raise ValueError(
                f"total_amount {self.total_amount} is lower than subtotal {self.subtotal}"
            )

    @property
    def is_zero(self) -> bool:
        return self.total_amount == ZERO

    @classmethod
    def zero(cls, currency_code: str = "PHP") -> "PriceBreakdown":
        """Cotización vacía: se muestra antes de elegir ambas fechas."""
        return cls(nights=0, subtotal=ZERO, currency_code=currency_code)

    @classmethod
    def fallback(
        cls, base_rate: Decimal, nights: int, currency_code: str = "PHP"
    ) -> "PriceBreakdown":
        """
        Cálculo de respaldo cuando el proveedor de precios no responde.

        Solo tarifa base x noches; impuestos, cargos y recargos por persona
        extra se omiten (no se conocen) y se marca como estimado.
        """
        if nights <= 0:
            return cls.zero(currency_code)
        subtotal = to_amount(base_rate) * nights
        return cls(
            nights=nights,
            subtotal=subtotal,
            taxes=ZERO,
            service_fee=ZERO,
            total_amount=subtotal,
            currency_code=currency_code,
            is_estimate=True,
        )

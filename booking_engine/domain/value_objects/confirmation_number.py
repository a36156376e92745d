"""Value Object ConfirmationNumber - número de confirmación de una reserva pagada."""

import secrets
import string
from dataclasses import dataclass


@dataclass(frozen=True)
class ConfirmationNumber:
    """
    Value Object inmutable con el número de confirmación.

    Solo se asigna cuando el pago fue exitoso.
    Formato: prefijo CNF + 8 caracteres alfanuméricos en mayúsculas (ej: CNFA1B2C3D4).
    """

    value: str

    PREFIX = "CNF"
    CODE_LENGTH = 8
    ALLOWED_CHARS = string.ascii_uppercase + string.digits

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("confirmation_number cannot be empty")

        if len(self.value) > 50:
            raise ValueError(f"confirmation_number exceeds 50 characters: {len(self.value)}")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> "ConfirmationNumber":
        code = "".join(secrets.choice(cls.ALLOWED_CHARS) for _ in range(cls.CODE_LENGTH))
        return cls(value=f"{cls.PREFIX}{code}")

    @classmethod
    def from_string(cls, value: str) -> "ConfirmationNumber":
        return cls(value=value.upper().strip())

"""Generadores de identificadores para reservas."""

import uuid

from booking_engine.domain.value_objects.confirmation_number import ConfirmationNumber


def generate_booking_id() -> str:
    """Genera un UUID v4 aleatorio como identificador de reserva."""
    return str(uuid.uuid4())


def generate_confirmation_number() -> str:
    """
    Genera un número de confirmación.

    Formato: CNF + 8 caracteres alfanuméricos en mayúsculas.
    Ejemplo: CNFA1B2C3D4
    """
    return str(ConfirmationNumber.generate())

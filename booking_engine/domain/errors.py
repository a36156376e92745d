"""Excepciones de dominio para el motor de reservas de habitaciones."""


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Errores de Reserva ===


class BookingNotFoundError(DomainError):
    """La reserva no existe."""

    def __init__(self, booking_id: str):
        super().__init__(
            message=f"Booking not found: {booking_id}",
            code="BOOKING_NOT_FOUND",
        )
        self.booking_id = booking_id


class InvalidBookingStatusError(DomainError):
    """El estado de la reserva no permite la transición solicitada."""

    def __init__(self, current_status: str, target_status: str):
        super().__init__(
            message=f"Cannot move booking from '{current_status}' to '{target_status}'",
            code="INVALID_BOOKING_STATUS",
        )
        self.current_status = current_status
        self.target_status = target_status


class ConfirmationNotFoundError(DomainError):
    """No hay reserva pagada con ese número de confirmación."""

    def __init__(self, confirmation_number: str):
        super().__init__(
            message=f"No confirmed booking for confirmation number {confirmation_number}",
            code="CONFIRMATION_NOT_FOUND",
        )
        self.confirmation_number = confirmation_number


# === Errores de Catálogo ===


class RoomTypeNotFoundError(DomainError):
    """El tipo de habitación no existe o está inactivo."""

    def __init__(self, business_unit_id: str, room_type_id: str):
        super().__init__(
            message="Room type not found or inactive",
            code="ROOM_TYPE_NOT_FOUND",
        )
        self.business_unit_id = business_unit_id
        self.room_type_id = room_type_id


# === Errores de Pago ===


class PaymentSessionNotFoundError(DomainError):
    """La sesión de pago no existe."""

    def __init__(self, session_id: str):
        super().__init__(
            message=f"Payment session not found: {session_id}",
            code="PAYMENT_SESSION_NOT_FOUND",
        )
        self.session_id = session_id


# === Errores de Validación ===


class ValidationError(DomainError):
    """
    Error de validación de datos de entrada.

    Attributes:
        fields: Mapa campo -> mensaje legible para el usuario.
    """

    def __init__(self, fields: dict[str, str]):
        summary = ", ".join(f"{name}: {reason}" for name, reason in fields.items())
        super().__init__(
            message=f"Validation failed ({summary})",
            code="VALIDATION_ERROR",
        )
        self.fields = dict(fields)


class InvalidDateRangeError(DomainError):
    """Rango de fechas inválido."""

    def __init__(self, message: str):
        super().__init__(message=message, code="INVALID_DATE_RANGE")


class InvalidWizardStepError(DomainError):
    """La operación no está permitida en el paso actual del asistente."""

    def __init__(self, current_step: str, operation: str):
        super().__init__(
            message=f"Cannot {operation} from step '{current_step}'",
            code="INVALID_WIZARD_STEP",
        )
        self.current_step = current_step
        self.operation = operation


# === Errores de Proveedores Externos ===


class ProviderError(DomainError):
    """Fallo al comunicarse con un colaborador externo (red, no-2xx, respuesta malformada)."""

    def __init__(self, message: str, code: str | None = None, http_status: int | None = None):
        super().__init__(message=message, code=code)
        self.http_status = http_status


class AvailabilityUnavailableError(ProviderError):
    """No se pudo obtener la disponibilidad."""


class PricingUnavailableError(ProviderError):
    """No se pudo obtener la cotización del proveedor de precios."""


class BookingSubmissionError(ProviderError):
    """Falló la creación de la reserva con pago."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        http_status: int | None = None,
        fields: dict[str, str] | None = None,
    ):
        super().__init__(message=message, code=code, http_status=http_status)
        self.fields = dict(fields or {})


class PaymentStatusUnavailableError(ProviderError):
    """No se pudo consultar el estado del pago."""


class PaymentProviderError(ProviderError):
    """El proveedor de pagos rechazó o no respondió a la solicitud."""

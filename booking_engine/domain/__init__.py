"""
Capa de Dominio - Motor de reservas de habitaciones.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.

Estructura:
- entities/: Entidades del dominio (RoomType, Booking, PaymentSession, BookingDraft)
- value_objects/: Objetos de valor inmutables (StayDates, PriceBreakdown, ConfirmationNumber)
- errors.py: Excepciones específicas del dominio
"""

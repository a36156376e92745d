"""
Capa de Aplicación - Motor de reservas de habitaciones.

Esta capa contiene los casos de uso y las interfaces (puertos).

Estructura:
- use_cases/: validación, cotización, asistente de reserva, conciliación de pagos
  y los casos de uso del lado servidor (disponibilidad, precios, creación, estado)
- interfaces/: Puertos (contratos para adaptadores)
"""

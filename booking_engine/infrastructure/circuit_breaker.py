"""
Circuit Breaker configuration for external service calls.

Pre-configured breakers for the payment provider and for the booking API
reads (pricing quotes and payment status) so a failing dependency fails
fast instead of piling up slow requests.

Circuit Breaker Pattern:
- CLOSED: Normal operation, requests pass through
- OPEN: Too many failures, requests fail immediately
- HALF_OPEN: Testing if service recovered, limited requests allowed
"""

import logging

from pybreaker import CircuitBreaker, CircuitBreakerError, CircuitBreakerListener

logger = logging.getLogger(__name__)


class ClientRequestError(Exception):
    """4xx answer from a dependency: the caller's fault, not an outage."""

    def __init__(self, error: Exception) -> None:
        super().__init__(str(error))
        self.error = error


class CircuitStateLogger(CircuitBreakerListener):
    """Logs circuit breaker state changes for monitoring and alerting."""

    def __init__(self, name: str) -> None:
        self.name = name

    def state_change(self, cb, old_state, new_state) -> None:
        logger.warning(
            "Circuit breaker state changed",
            extra={
                "breaker_name": self.name,
                "old_state": old_state.name if old_state else None,
                "new_state": new_state.name,
            },
        )


def build_breaker(name: str, fail_max: int = 5, reset_timeout: int = 60) -> CircuitBreaker:
    return CircuitBreaker(
        fail_max=fail_max,
        reset_timeout=reset_timeout,
        name=f"{name}_circuit_breaker",
        exclude=[ClientRequestError],
        listeners=[CircuitStateLogger(name)],
    )


# Stripe Checkout (create/retrieve session)
payment_provider_breaker = build_breaker("payment_provider")

# Booking API reads
pricing_breaker = build_breaker("pricing")
payment_status_breaker = build_breaker("payment_status")


__all__ = [
    "ClientRequestError",
    "CircuitBreakerError",
    "build_breaker",
    "payment_provider_breaker",
    "pricing_breaker",
    "payment_status_breaker",
]

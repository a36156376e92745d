from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    database_url: str | None = None  # e.g. sqlite+aiosqlite:///./booking_engine.db
    use_in_memory: bool = True

    stripe_secret_key: str | None = Field(default=None, alias="STRIPE_SECRET_KEY")
    checkout_success_url: str = "http://localhost:3000/booking/success"
    checkout_cancel_url: str = "http://localhost:3000/booking/cancelled"

    tax_rate: Decimal = Decimal("0.12")
    service_fee_rate: Decimal = Decimal("0.10")

    # Client side (BookingApiClient + wizard)
    api_base_url: str = "http://localhost:8000/api"
    http_timeout_seconds: float = 10.0
    payment_poll_interval_seconds: float = 3.0
    payment_poll_timeout_seconds: float | None = 900.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

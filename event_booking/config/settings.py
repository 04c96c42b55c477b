"""
Application settings and configuration.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Event Booking Wizard"
    app_version: str = "1.0.0"
    debug: bool = Field(default=False)

    # Booking backend
    booking_api_base: str = Field(default="http://localhost:3000/api")
    booking_api_token: Optional[str] = Field(default=None)
    request_timeout: float = Field(default=10.0)

    # Pricing
    hourly_rate: Decimal = Field(default=Decimal("50"))
    tax_rate: Optional[Decimal] = Field(default=None)
    currency: str = Field(default="USD")

    # Wizard defaults
    default_guest_count: int = Field(default=1, ge=0)
    max_sessions: int = Field(default=1000, ge=1)

    # Timezone used for "today" when blocking past dates
    timezone: str = Field(default="America/New_York")

    # Logging
    log_level: str = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()

"""Runtime configuration for the dispatch services.

Values come from environment variables prefixed with ``DISPATCH_`` (or a
local ``.env``), e.g. ``DISPATCH_CARD_FAILURE_RATE=0``.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DispatchSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DISPATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "development"

    card_failure_rate: float = Field(default=0.1, ge=0.0, le=1.0)
    paypal_failure_rate: float = Field(default=0.1, ge=0.0, le=1.0)
    bank_transfer_failure_rate: float = Field(default=0.1, ge=0.0, le=1.0)
    crypto_congestion_probability: float = Field(default=0.15, ge=0.0, le=1.0)
    crypto_congestion_failure_rate: float = Field(default=0.3, ge=0.0, le=1.0)

    notification_failure_rate: float = Field(default=0.05, ge=0.0, le=1.0)

    audit_max_results: int = Field(default=1000, gt=0)


@lru_cache(maxsize=1)
def get_settings() -> DispatchSettings:
    return DispatchSettings()

"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from storefront.domain.catalog import AvailabilityPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Catalog
    default_currency: str = "USD"

    # Resolution
    default_availability_policy: AvailabilityPolicy = AvailabilityPolicy.HIDE_SOLD_OUT
    low_stock_threshold: int = 5

    # Line items
    max_line_quantity: int = 99

    # Logging
    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()

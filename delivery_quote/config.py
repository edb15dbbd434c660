"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    venue_api_base: str = "https://consumer-api.development.dev.woltapi.com/home-assignment-api/v1/venues"

    # Service
    service_name: str = "delivery-quote"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Pricing
    # None disables the hard cap and leaves the decision to the venue's tier table
    max_delivery_distance_meters: Optional[int] = 2000


settings = Settings()

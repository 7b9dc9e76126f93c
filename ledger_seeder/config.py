"""Configuration management using Pydantic Settings"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Ledger API
    ledger_api_base: str = "https://dev.lunchmoney.app/v1"
    ledger_api_key: str | None = None

    # Service
    service_name: str = "ledger-seeder"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 30.0
    request_max_retries: int = 3  # GET requests only
    request_backoff_base: float = 0.5  # Exponential backoff base in seconds

    # Generation
    base_currency: str = "usd"
    batch_size: int = Field(default=500, ge=1, le=500)
    max_months_back: int = 36
    detection_lookback_days: int = 365
    amortization_order: Literal["offset", "chronological"] = "offset"


settings = Settings()

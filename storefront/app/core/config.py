"""Storefront Service Configuration"""

from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Storefront Cart"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8002
    cors_origins: list[str] = ["*"]

    # Storefront REST API
    api_url: str = "http://localhost:3000"
    api_token: Optional[str] = None
    request_timeout: float = 30.0

    # Order summary
    tax_rate: Decimal = Decimal("0.10")
    shipping_fee: Decimal = Decimal("0")

    # Toasts
    toast_limit: int = 5
    toast_dismiss_seconds: Optional[float] = 5.0

    # Cart sessions
    cart_idle_hours: float = 24.0
    cart_sweep_interval_seconds: float = 600.0

    @property
    def api_auth_configured(self) -> bool:
        return bool(self.api_token)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()

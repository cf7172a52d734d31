"""Storefront Service Configuration"""

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Atlantic Leather Storefront"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    currency: str = "ETB"

    # Backend API server (owns the relational database)
    backend_url: str = "http://localhost:3001"
    public_api_key: Optional[str] = None
    request_timeout: float = 10.0

    # Cart persistence
    cart_storage_dir: Optional[str] = None  # None keeps carts in memory
    cart_storage_key: str = "atlantic-leather-cart"

    # Security
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    rate_limit_max_requests: int = 100
    rate_limit_window_seconds: int = 15 * 60
    csrf_enabled: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def public_api_url(self) -> str:
        """Base URL of the backend's public (storefront) API"""
        return f"{self.backend_url.rstrip('/')}/api/public"

    @property
    def public_api_configured(self) -> bool:
        """Check if a usable public API key is configured"""
        return bool(self.public_api_key) and self.public_api_key != "your_private_api_key_here"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()

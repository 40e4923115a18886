"""
Configuration management for the Vendor Dashboard API.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


DEFAULT_API_VERSION = "2023-07"
PLATFORM_DOMAIN_SUFFIX = ".myshopify.com"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    shopify_store_domain: str = Field(default="")
    shopify_access_token: str = Field(default="")
    shopify_api_version: str = Field(default=DEFAULT_API_VERSION)
    shopify_store_domain_live: Optional[str] = Field(default=None)

    default_vendor: str = Field(default="Wellbeing")
    feed_currency: str = Field(default="BDT")

    request_timeout: float = Field(default=30.0, gt=0)
    max_pages: int = Field(default=1000, ge=1)

    log_level: str = Field(default="INFO")

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    @property
    def api_version(self) -> str:
        """API version, falling back to the fixed default when set to an empty string."""
        return self.shopify_api_version or DEFAULT_API_VERSION

    @property
    def storefront_domain(self) -> str:
        """
        Public-facing storefront domain.

        Uses SHOPIFY_STORE_DOMAIN_LIVE when set, otherwise the API domain with
        the platform suffix swapped for ".com" (shop.myshopify.com -> shop.com).
        """
        if self.shopify_store_domain_live:
            return normalize_domain(self.shopify_store_domain_live)
        return normalize_domain(self.shopify_store_domain).replace(PLATFORM_DOMAIN_SUFFIX, ".com")


def normalize_domain(domain: str) -> str:
    """Strip scheme and trailing slash from a configured domain."""
    if not domain:
        return ""
    domain = domain.strip()
    for prefix in ("https://", "http://"):
        if domain.startswith(prefix):
            domain = domain[len(prefix):]
    return domain.rstrip("/")


def validate_settings(settings: Settings) -> tuple[bool, str]:
    """
    Validate that the upstream connection is configured.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not settings.shopify_store_domain or not settings.shopify_store_domain.strip():
        return False, "SHOPIFY_STORE_DOMAIN is not configured"
    if not settings.shopify_access_token or not settings.shopify_access_token.strip():
        return False, "SHOPIFY_ACCESS_TOKEN is not configured"
    return True, ""


@lru_cache
def get_settings() -> Settings:
    """Get application settings."""
    return Settings()

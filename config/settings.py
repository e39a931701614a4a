"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Both secrets are optional: a missing CJ key means manual fulfillment,
    a missing orders secret means every fulfill request is rejected.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # API SECURITY
    # ===================
    orders_secret: Optional[str] = Field(
        None,
        description="Shared secret expected in the x-fulfill-secret header"
    )

    # ===================
    # CJ DROPSHIPPING
    # ===================
    cj_api_key: Optional[str] = Field(
        None,
        description="CJ Dropshipping API key (exchanged for an access token)"
    )
    cj_api_base_url: str = Field(
        default="https://developers.cjdropshipping.com/api2.0/v1",
        description="CJ Dropshipping API base URL"
    )
    cj_request_timeout: float = Field(
        default=30,
        gt=0,
        le=120,
        description="Timeout in seconds for each CJ API call"
    )
    cj_order_remark_brand: str = Field(
        default="SkillzStorm",
        description="Brand tag prefixed to the order remark"
    )
    cj_placeholder_phone: str = Field(
        default="0000000000",
        description="Phone number sent to CJ when the customer gave none"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def cj_configured(self) -> bool:
        """Check if a CJ API key is available."""
        return bool(self.cj_api_key)


def get_settings() -> Settings:
    """
    Load settings from the environment.

    Not cached: secrets are re-read on every call so a rotated key or
    secret takes effect on the next request. Used as a FastAPI dependency.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are present but invalid
    """
    return Settings()


# Process-level settings for logging and server startup
settings = get_settings()

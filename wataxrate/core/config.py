"""
Lookup configuration using Pydantic Settings.

All values can be overridden through ``WATAXRATE_*`` environment variables
or a ``.env`` file in the working directory.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wataxrate import __version__

# DOR "Address Rates" URL interface
DOR_ADDRESS_RATES_URL = "https://webgis.dor.wa.gov/webapi/AddressRates.aspx"


class LookupSettings(BaseSettings):
    """
    Settings for talking to the tax-rate service.

    Single lookups use ``timeout`` (None disables it). The retrying
    lookup bounds each attempt with ``attempt_timeout`` instead.
    """

    model_config = SettingsConfigDict(
        env_prefix="WATAXRATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(
        default=DOR_ADDRESS_RATES_URL,
        description="Endpoint of the address rate lookup service",
    )
    timeout: float | None = Field(
        default=None,
        description="Request timeout in seconds for single lookups (None disables it)",
    )
    max_attempts: int = Field(
        default=3, description="Attempts made by the retrying lookup", ge=1
    )
    attempt_timeout: float = Field(
        default=2.5, description="Seconds allowed per retrying attempt", gt=0
    )
    user_agent: str = Field(
        default=f"wataxrate/{__version__}", description="User-Agent header value"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Minimum log level"
    )
    log_json: bool = Field(default=False, description="Emit JSON log lines")

    @field_validator("base_url")
    @classmethod
    def check_base_url(cls, v: str) -> str:
        """Require an http(s) URL without a query string."""
        if not v.startswith(("http://", "https://")):
            msg = "base_url must be an http(s) URL"
            raise ValueError(msg)
        if "?" in v:
            msg = "base_url must not contain a query string"
            raise ValueError(msg)
        return v

    @field_validator("timeout")
    @classmethod
    def check_timeout(cls, v: float | None) -> float | None:
        """Reject non-positive timeouts; None means no timeout."""
        if v is not None and v <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v


@lru_cache
def get_settings() -> LookupSettings:
    """
    Get cached lookup settings.

    Returns:
        Settings loaded once from the environment.
    """
    return LookupSettings()

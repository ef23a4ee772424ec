"""Runtime configuration for the planner service.

Relies on pydantic-settings so that environment variables (prefixed with ``TRAVEL_AI_``)
can override defaults. Provider credentials are only ever read from the
environment or a ``.env`` file.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from travel_ai.services.errors import ProviderConfigurationError

logger = logging.getLogger(__name__)

_PROVIDER_FOR_SETTING = {
    "serpapi_key": "serpapi",
    "flight_api_key": "flightapi",
    "mapping_api_key": "mapping",
}


class Settings(BaseSettings):
    """Captures runtime configuration for provider access and result shaping."""

    serpapi_key: Optional[str] = Field(default=None, description="SerpAPI key for web/shopping/hotel search")
    flight_api_key: Optional[str] = Field(default=None, description="FlightAPI key for round-trip pricing")
    mapping_api_key: Optional[str] = Field(default=None, description="Key for the city mapping lookup")

    serpapi_base_url: str = Field(default="https://serpapi.com/search.json")
    flight_api_base_url: str = Field(default="https://api.flightapi.io")
    mapping_api_base_url: str = Field(default="https://api.makcorps.com/mapping")
    flight_booking_origin: str = Field(
        default="https://www.skyscanner.com",
        description="Web origin prefixed to itinerary deep-link paths",
    )
    http_timeout_s: float = Field(default=20.0, description="Per-request timeout for provider calls")
    flight_timeout_s: float = Field(default=45.0, description="Timeout for the slower flight pricing call")

    search_country: str = Field(default="us")
    search_language: str = Field(default="en")
    default_currency: str = Field(default="USD")

    max_flight_results: int = Field(default=10)
    max_hotel_results: int = Field(default=10)
    max_hotel_ads: int = Field(default=3)
    web_search_results: int = Field(default=10)
    shopping_search_results: int = Field(default=5)

    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8000)

    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("data/logs"))
    city_catalog_path: Optional[Path] = Field(
        default=None, description="Optional JSON file extending the built-in city fallback table"
    )

    model_config = SettingsConfigDict(
        env_prefix="TRAVEL_AI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
    )

    @field_validator("log_dir", mode="before")
    def _expand_log_dir(cls, value: str | Path) -> Path:
        if isinstance(value, Path):
            return value
        return Path(value).expanduser()

    @field_validator("city_catalog_path", mode="before")
    def _expand_catalog_path(cls, value: str | Path | None) -> Optional[Path]:
        if value in (None, ""):
            return None
        return Path(value).expanduser()

    @field_validator("default_currency")
    def _validate_currency(cls, value: str) -> str:
        value = value.strip().upper()
        if len(value) != 3 or not value.isalpha():
            raise ValueError("default_currency must be a 3-letter ISO code")
        return value

    @field_validator(
        "max_flight_results",
        "max_hotel_results",
        "web_search_results",
        "shopping_search_results",
    )
    def _validate_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("result limits must be positive")
        return value

    @field_validator("max_hotel_ads")
    def _validate_ads(cls, value: int) -> int:
        if value < 0:
            raise ValueError("max_hotel_ads must not be negative")
        return value

    def require(self, name: str) -> str:
        """Return credential ``name`` or raise if it is not configured."""
        value = getattr(self, name, None)
        if not value:
            raise ProviderConfigurationError(_PROVIDER_FOR_SETTING.get(name, name), name)
        return value

    def ensure_directories(self) -> None:
        """Create directories that must exist at runtime."""
        self.log_dir.mkdir(parents=True, exist_ok=True)

"""12-factor configuration adapter using environment variables and TOML config."""

import logging
import tomllib
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _normalize_currency(value: str) -> str:
    if len(value) != 3 or not value.isalpha():
        raise ValueError("currency must be a three-letter ISO 4217 code")
    return value.upper()


def _normalize_timezone(value: str) -> str:
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown timezone '{value}'") from None
    return value


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to bind the server to")
    reload: bool = Field(default=False, description="Enable auto-reload for development")
    log_level: str = Field(default="INFO", description="Root log level")

    # Pricing
    currency: str = Field(default="INR", description="ISO 4217 code quoted prices are in")
    timezone: str = Field(
        default="Asia/Kolkata",
        description="Timezone whose wall clock picks the time-of-day price (IANA name)",
    )

    # TOML config file path with stations and API principals
    config_file: str | None = Field(
        default="config.example.toml",
        description="Path to TOML configuration file with stations and principals",
    )

    # Rate limiting configuration
    rate_limit_per_minute: int = Field(
        default=100,
        description="Maximum number of requests allowed per IP address per minute",
    )

    # Uploaded luggage photos are served below this URL
    image_base_url: str = Field(
        default="/images",
        description="Base URL returned for stored luggage photos",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one the logging module knows."""
        if v.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return v.upper()

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """Validate currency is a three-letter code."""
        return _normalize_currency(v)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a known IANA name."""
        return _normalize_timezone(v)

    @property
    def log_level_value(self) -> int:
        """Numeric log level for logging.basicConfig."""
        return logging.getLevelName(self.log_level)

    @property
    def tzinfo(self) -> ZoneInfo:
        """Configured timezone as a tzinfo."""
        return ZoneInfo(self.timezone)

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse TOML file, updating pricing settings."""
        if not self.config_file:
            raise ValueError("config_file must be set to load stations configuration")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        pricing = toml_data.get("pricing", {})
        if not isinstance(pricing, dict):
            pricing = {}
        if "currency" in pricing:
            self.currency = _normalize_currency(str(pricing["currency"]))
        if "timezone" in pricing:
            self.timezone = _normalize_timezone(str(pricing["timezone"]))

        return toml_data

    def get_pricing_config(self) -> dict[str, Any]:
        """Return the ``[pricing]`` table from the TOML file."""
        pricing = self._load_toml_data().get("pricing", {})
        if not isinstance(pricing, dict):
            raise ValueError("pricing must be a table")
        return pricing

    def get_stations_config(self) -> list[dict[str, Any]]:
        """Return the ``[[stations]]`` tables from the TOML file."""
        stations = self._load_toml_data().get("stations", [])
        if not isinstance(stations, list):
            raise ValueError("stations must be an array of tables")
        return stations

    def get_checklist_config(self) -> dict[str, list[dict[str, Any]]]:
        """Return the ``[[checklist.categories]]`` and ``[[checklist.items]]`` tables."""
        checklist = self._load_toml_data().get("checklist", {})
        if not isinstance(checklist, dict):
            raise ValueError("checklist must be a table")
        categories = checklist.get("categories", [])
        items = checklist.get("items", [])
        if not isinstance(categories, list) or not isinstance(items, list):
            raise ValueError("checklist categories and items must be arrays of tables")
        return {"categories": categories, "items": items}

    def get_principals_config(self) -> list[dict[str, Any]]:
        """Return the ``[[principals]]`` tables from the TOML file."""
        principals = self._load_toml_data().get("principals", [])
        if not isinstance(principals, list):
            raise ValueError("principals must be an array of tables")
        return principals

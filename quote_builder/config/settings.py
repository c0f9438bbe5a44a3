"""
Configuration settings for the Quote Builder.

Uses pydantic-settings for environment variable management with validation.
Defaults reproduce the fixed business constants (10% tax, 30 day validity,
history and recent-service caps of 10).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PricingSettings(BaseSettings):
    """Tax, validity and unit configuration for quote assembly."""

    model_config = SettingsConfigDict(env_prefix="QUOTE_")

    tax_rate: float = 0.10
    validity_days: int = 30
    currency_symbol: str = "₩"
    default_unit: str = "ea"
    monthly_unit: str = "month"


class HistorySettings(BaseSettings):
    """Bounds and placeholder text for quote history and recent services."""

    model_config = SettingsConfigDict(env_prefix="HISTORY_")

    max_records: int = 10
    max_recent_services: int = 10
    client_placeholder: str = "No client name"
    project_placeholder: str = "No project name"


class StorageSettings(BaseSettings):
    """Persistence backend configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    backend: Literal["memory", "json", "sql"] = "memory"
    json_dir: str = "./data"
    database_url: str = "sqlite:///./data/quote_builder.db"


class CompanySettings(BaseSettings):
    """Issuing company details used to prefill a new quote session."""

    model_config = SettingsConfigDict(env_prefix="COMPANY_")

    name: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    business_number: str = ""
    notes: str = ""


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Sub-configurations
    pricing: PricingSettings = Field(default_factory=PricingSettings)
    history: HistorySettings = Field(default_factory=HistorySettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    company: CompanySettings = Field(default_factory=CompanySettings)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Clear cache with get_settings.cache_clear() if needed.
    """
    return Settings()


# Convenience export
settings = get_settings()

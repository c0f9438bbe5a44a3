"""Configuration package."""

from quote_builder.config.settings import (
    CompanySettings,
    HistorySettings,
    PricingSettings,
    Settings,
    StorageSettings,
    get_settings,
    settings,
)

__all__ = [
    "CompanySettings",
    "HistorySettings",
    "PricingSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "settings",
]

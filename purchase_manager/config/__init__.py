"""Configuration package."""

from purchase_manager.config.settings import (
    AppSettings,
    Settings,
    StorageSettings,
    TransferSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "Settings",
    "StorageSettings",
    "TransferSettings",
    "get_settings",
    "validate_all_settings",
]

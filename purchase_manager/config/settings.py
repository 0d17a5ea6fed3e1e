"""
Configuration Management for Purchase Manager

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here and every value has
a default. The application runs with no environment at all; environment
variables and a .env file only override the defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value persistence provider configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PURCHASES_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["file", "memory"] = Field(
        default="file",
        description="Which storage provider to use"
    )
    path: str = Field(
        default=".purchase_manager/storage.json",
        description="Backing file for the file provider"
    )
    key: str = Field(
        default="purchases",
        min_length=1,
        description="Fixed key under which the purchase collection is stored"
    )


class TransferSettings(BaseSettings):
    """Import/export channel configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PURCHASES_TRANSFER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    export_filename: str = Field(
        default="purchases.json",
        description="File name offered for exported documents"
    )
    export_dir: str = Field(
        default=".",
        description="Directory the local channel writes exports to"
    )
    indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Indent for exported JSON (0 = compact)"
    )

    @field_validator('export_filename')
    @classmethod
    def validate_export_filename(cls, v: str) -> str:
        """Export name must be a bare file name."""
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"Export filename must be a plain file name: {v!r}")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    label_locale: Literal["ko", "en"] = Field(
        default="ko",
        description="Language of the field labels shown to the user"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings are loaded lazily so one bad section does not block the rest

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def transfer(self) -> TransferSettings:
        return TransferSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the sections that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "transfer", "app"):
        try:
            _ = getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results

"""
Storage Services Package

Provides the abstract key-value interface and concrete providers.
The local JSON file is the default backend, but providers are swappable.
"""

from typing import Optional

from purchase_manager.config import StorageSettings, get_settings
from purchase_manager.services.storage.interface import (
    StorageError,
    StorageProviderInterface,
)
from purchase_manager.services.storage.local_file import JsonFileStorageProvider
from purchase_manager.services.storage.memory import InMemoryStorageProvider


def create_storage_provider(
    settings: Optional[StorageSettings] = None,
) -> StorageProviderInterface:
    """Build the provider selected by the storage settings."""
    settings = settings or get_settings().storage
    if settings.backend == "memory":
        return InMemoryStorageProvider()
    return JsonFileStorageProvider(settings.path)


__all__ = [
    # Interface
    "StorageProviderInterface",
    # Exceptions
    "StorageError",
    # Implementations
    "InMemoryStorageProvider",
    "JsonFileStorageProvider",
    "create_storage_provider",
]

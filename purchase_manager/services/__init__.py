"""Services package."""

from purchase_manager.services.storage import (
    InMemoryStorageProvider,
    JsonFileStorageProvider,
    StorageError,
    StorageProviderInterface,
    create_storage_provider,
)
from purchase_manager.services.transfer import (
    LocalFileChannel,
    TransferChannelInterface,
    TransferError,
)

__all__ = [
    # Storage services
    "InMemoryStorageProvider",
    "JsonFileStorageProvider",
    "StorageError",
    "StorageProviderInterface",
    "create_storage_provider",
    # Transfer services
    "LocalFileChannel",
    "TransferChannelInterface",
    "TransferError",
]

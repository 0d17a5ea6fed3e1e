"""Record store package."""

from purchase_manager.store.record_store import (
    DEFAULT_STORAGE_KEY,
    IndexOutOfRange,
    RecordStore,
    RecordStoreError,
)

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "IndexOutOfRange",
    "RecordStore",
    "RecordStoreError",
]

"""In-memory storage provider, used by tests and the "memory" backend."""

from typing import Optional

from purchase_manager.services.storage.interface import StorageProviderInterface


class InMemoryStorageProvider(StorageProviderInterface):
    """Keeps values in a dict for the lifetime of the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

"""
Abstract Storage Interface

DESIGN DECISION: The record store does not know where its data lives.
It talks to an opaque key-value provider that stores strings:
1. A local JSON file stands in for browser-local storage
2. An in-memory provider is used for testing
3. Anything else (a real browser bridge, a database row) can be plugged in

The store serializes and parses JSON itself. Providers only move text.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageProviderInterface(ABC):
    """
    Abstract interface for a string key-value store.

    Any persistence provider must implement these two methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backing store cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a string under a key, replacing any previous value.

        Args:
            key: Storage key
            value: Text to store

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass

"""
Abstract Storage Interface

DESIGN DECISION: The record store persists through a tiny key-value
interface rather than talking to files directly. This allows us to:
1. Swap the JSON file for platform settings storage or a database later
2. Use in-memory storage for testing
3. Keep the record store decoupled from storage implementation

Values are opaque strings. The record store decides what goes in them.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BlobStoreInterface(ABC):
    """
    Abstract interface for a process-wide key-value blob store.

    Any storage implementation must implement these methods.
    Calls are blocking; the record store moves its startup read
    off the event loop itself.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: The entry key

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: The entry key
            value: The string to store

        Raises:
            StorageWriteError: If the value could not be written
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Remove a key. Removing an absent key is not an error.

        Raises:
            StorageWriteError: If the removal could not be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Stored data could not be read."""
    pass


class StorageWriteError(StorageError):
    """Data could not be written to storage."""
    pass

"""
Storage Services Package

Provides the key-value blob store interface and its implementations.
The JSON file backend is the default, but the interface is swappable.
"""

from expense_tracker.services.storage.interface import (
    BlobStoreInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from expense_tracker.services.storage.json_file import JsonFileBlobStore
from expense_tracker.services.storage.memory import InMemoryBlobStore

__all__ = [
    # Interface
    "BlobStoreInterface",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryBlobStore",
    "JsonFileBlobStore",
]

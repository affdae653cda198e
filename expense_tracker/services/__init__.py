"""Services package."""

from expense_tracker.services.biometrics import (
    BiometricAuthenticator,
    BiometricError,
    BiometricRejectedError,
    BiometricUnavailableError,
)
from expense_tracker.services.notifications import (
    CollectingNotifier,
    LocalAlert,
    LogNotifier,
    NotifierInterface,
)
from expense_tracker.services.storage import (
    BlobStoreInterface,
    InMemoryBlobStore,
    JsonFileBlobStore,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    # Biometrics
    "BiometricAuthenticator",
    "BiometricError",
    "BiometricRejectedError",
    "BiometricUnavailableError",
    # Notifications
    "CollectingNotifier",
    "LocalAlert",
    "LogNotifier",
    "NotifierInterface",
    # Storage services
    "BlobStoreInterface",
    "InMemoryBlobStore",
    "JsonFileBlobStore",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]

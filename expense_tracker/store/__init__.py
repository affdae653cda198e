"""Record store package."""

from expense_tracker.store.errors import (
    DuplicateEmailError,
    NoCurrentUserError,
    RecordStoreError,
    StoreNotReadyError,
    UserMismatchError,
    UserNotFoundError,
)
from expense_tracker.store.record_store import RecordStore, StoreListener

__all__ = [
    "DuplicateEmailError",
    "NoCurrentUserError",
    "RecordStore",
    "RecordStoreError",
    "StoreListener",
    "StoreNotReadyError",
    "UserMismatchError",
    "UserNotFoundError",
]

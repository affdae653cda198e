"""Shared fixtures. No test touches the network or the real data file."""

import asyncio
from decimal import Decimal
from unittest.mock import Mock

import pytest

from expense_tracker.audit import AuditLogger
from expense_tracker.config import NotificationSettings, StorageSettings
from expense_tracker.models import UserProfile
from expense_tracker.services import InMemoryBlobStore, NotifierInterface
from expense_tracker.store import RecordStore


def make_profile(
    email: str = "asha@example.com",
    salary: str = "50000",
    name: str = "Asha",
) -> UserProfile:
    return UserProfile(
        name=name,
        age=29,
        gender="Female",
        marital_status="Single",
        phone="9876543210",
        email=email,
        monthly_salary=Decimal(salary),
    )


@pytest.fixture
def storage_settings():
    return StorageSettings(
        backend="memory",
        users_key="users",
        current_user_id_key="currentUserId",
    )


@pytest.fixture
def notification_settings():
    return NotificationSettings(
        enabled=True,
        budget_alert_title="Budget Exceeded",
        budget_alert_body="Your expenses have exceeded your monthly income.",
    )


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def notifier():
    return Mock(spec=NotifierInterface)


@pytest.fixture
def audit_logger():
    return AuditLogger(history_size=50)


@pytest.fixture
def make_store(blob_store, notifier, audit_logger, storage_settings, notification_settings):
    """Build a store over the shared blob store; loaded unless told otherwise."""
    def _make(load: bool = True, blobs=None) -> RecordStore:
        store = RecordStore(
            blob_store=blobs or blob_store,
            notifier=notifier,
            audit_logger=audit_logger,
            storage_settings=storage_settings,
            notification_settings=notification_settings,
        )
        if load:
            asyncio.run(store.load())
        return store
    return _make


@pytest.fixture
def store(make_store):
    return make_store()

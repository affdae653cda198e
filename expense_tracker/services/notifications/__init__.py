"""Local notification services."""

from expense_tracker.services.notifications.notifier import (
    CollectingNotifier,
    LocalAlert,
    LogNotifier,
    NotifierInterface,
)

__all__ = [
    "CollectingNotifier",
    "LocalAlert",
    "LogNotifier",
    "NotifierInterface",
]

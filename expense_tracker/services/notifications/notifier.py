"""
Local Notification Service

DESIGN DECISION: Notifications are fire-and-forget.
The record store calls notify() and moves on; no acknowledgement or
delivery guarantee is expected, and a failing notifier must never
undo an expense that was already saved.

Scheduling real OS push notifications is a platform concern and lives
outside this package. Implementations here either log the alert or
collect it for the UI to display.
"""

from abc import ABC, abstractmethod
from datetime import datetime

import structlog
from pydantic import BaseModel, Field


class LocalAlert(BaseModel):
    """An alert that was raised."""

    title: str
    body: str
    raised_at: datetime = Field(default_factory=datetime.now)


class NotifierInterface(ABC):
    """Show-a-local-alert capability."""

    @abstractmethod
    def notify(self, title: str, body: str) -> None:
        """
        Raise a local alert.

        Args:
            title: Alert title
            body: Alert body text
        """
        pass


class LogNotifier(NotifierInterface):
    """Writes alerts to the structured log."""

    def __init__(self):
        self._logger = structlog.get_logger(__name__)

    def notify(self, title: str, body: str) -> None:
        self._logger.warning("local_alert", title=title, body=body)


class CollectingNotifier(NotifierInterface):
    """
    Keeps alerts in memory until they are drained.

    The Streamlit front end drains this after each action and shows
    the alerts as toasts.
    """

    def __init__(self):
        self._pending: list[LocalAlert] = []
        self._logger = structlog.get_logger(__name__)

    def notify(self, title: str, body: str) -> None:
        self._logger.info("local_alert_queued", title=title)
        self._pending.append(LocalAlert(title=title, body=body))

    @property
    def pending(self) -> list[LocalAlert]:
        return list(self._pending)

    def drain(self) -> list[LocalAlert]:
        """Return and forget every pending alert."""
        alerts, self._pending = self._pending, []
        return alerts

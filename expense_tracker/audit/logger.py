"""
Audit Logger

DESIGN DECISION: Every change to the record store is logged.
This provides:
1. Complete traceability of account and expense actions
2. Debugging capability (including silent save failures)
3. A recent-history view for the settings page

The audit logger:
- Is synchronous, like the store operations that feed it
- Never raises (logging must not break the main flow)
- Keeps a bounded in-memory history of recent events
"""

import logging
from collections import deque
from typing import Optional

import structlog

from expense_tracker.models.events import EventSeverity, StoreEvent, StoreEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging (and so structlog) to stderr at the given level."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper()))


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory ring of recent events (for display)
    """

    def __init__(self, history_size: int = 200):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep.
                          0 disables the in-memory history.
        """
        self._history: deque[StoreEvent] = deque(maxlen=history_size)
        self._logger = structlog.get_logger("expense_tracker.audit")

    def log(self, event: StoreEvent) -> None:
        """
        Log a store event.

        Always logs locally at the level matching the event severity.
        """
        log_dict = event.to_log_dict()

        if event.severity in (EventSeverity.ERROR, EventSeverity.CRITICAL):
            self._logger.error("store_event", **log_dict)
        elif event.severity == EventSeverity.WARNING:
            self._logger.warning("store_event", **log_dict)
        elif event.severity == EventSeverity.DEBUG:
            self._logger.debug("store_event", **log_dict)
        else:
            self._logger.info("store_event", **log_dict)

        if self._history.maxlen:
            self._history.append(event)

    def recent_events(self, limit: int = 50) -> list[StoreEvent]:
        """Most recent events, newest first."""
        events = list(self._history)
        events.reverse()
        return events[:limit]

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an unexpected error."""
        self.log(StoreEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))

"""
Store Event Models for Expense Tracker

Every change to the record store produces a StoreEvent.
Events serve two purposes:
1. Structured audit logging (what happened, to whom, when)
2. Change notification for subscribers (e.g. the UI refreshing)

DESIGN DECISION: Events are descriptive only. They never carry the
full user record, just the id and a few details, so logging them is safe.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class StoreEventType(str, Enum):
    """
    Types of events the store emits.

    Every store operation has its own event type.
    """
    # Lifecycle
    STORE_LOADED = "store_loaded"
    STORE_LOAD_FAILED = "store_load_failed"

    # Accounts
    USER_REGISTERED = "user_registered"
    REGISTRATION_REJECTED = "registration_rejected"
    USER_SIGNED_IN = "user_signed_in"
    SIGN_IN_FAILED = "sign_in_failed"
    BIOMETRIC_SIGN_IN = "biometric_sign_in"
    USER_SIGNED_OUT = "user_signed_out"
    PROFILE_UPDATED = "profile_updated"

    # Expenses
    EXPENSE_ADDED = "expense_added"
    BUDGET_EXCEEDED = "budget_exceeded"

    # Persistence
    SAVE_FAILED = "save_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class EventSeverity(str, Enum):
    """Severity level for store events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class StoreEvent(BaseModel):
    """
    A single store event.

    This is the core unit of the audit trail and of change notification.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred"
    )

    # Event classification
    event_type: StoreEventType = Field(
        ...,
        description="Type of event"
    )
    severity: EventSeverity = Field(
        default=EventSeverity.INFO,
        description="Event severity"
    )

    # Context
    user_id: Optional[UUID] = Field(
        default=None,
        description="ID of the user this event relates to"
    )

    description: str = Field(
        ...,
        description="Fixed summary of what happened; variable data goes in details"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "user_id": str(self.user_id) if self.user_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class StoreEventBuilder:
    """
    Helper class to build store events with common patterns.

    Usage:
        event = StoreEventBuilder.user_registered(user_id, email)
        event = StoreEventBuilder.expense_added(user_id, expense_id, "Food", "200")
    """

    @staticmethod
    def store_loaded(user_count: int, current_user_id: Optional[UUID]) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.STORE_LOADED,
            user_id=current_user_id,
            description=f"Store loaded with {user_count} users",
            details={
                "user_count": user_count,
                "signed_in": current_user_id is not None,
            },
        )

    @staticmethod
    def store_load_failed(error_message: str) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.STORE_LOAD_FAILED,
            severity=EventSeverity.ERROR,
            description="Saved data could not be read; starting empty",
            error_message=error_message,
        )

    @staticmethod
    def user_registered(user_id: UUID, email: str) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.USER_REGISTERED,
            user_id=user_id,
            description="User registered",
            details={"email": email},
            is_user_action=True,
        )

    @staticmethod
    def registration_rejected(email: str, reason: str) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.REGISTRATION_REJECTED,
            severity=EventSeverity.WARNING,
            description=f"Registration rejected: {reason}",
            details={"email": email, "reason": reason},
            is_user_action=True,
        )

    @staticmethod
    def user_signed_in(user_id: UUID, email: str) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.USER_SIGNED_IN,
            user_id=user_id,
            description="User signed in",
            details={"email": email},
            is_user_action=True,
        )

    @staticmethod
    def sign_in_failed(email: str) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.SIGN_IN_FAILED,
            severity=EventSeverity.WARNING,
            description="Sign in failed: unknown email",
            details={"email": email},
            is_user_action=True,
        )

    @staticmethod
    def biometric_sign_in(user_id: UUID) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.BIOMETRIC_SIGN_IN,
            user_id=user_id,
            description="Most recently registered user signed in via biometrics",
            is_user_action=True,
        )

    @staticmethod
    def user_signed_out(user_id: Optional[UUID]) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.USER_SIGNED_OUT,
            user_id=user_id,
            description="User signed out",
            is_user_action=True,
        )

    @staticmethod
    def profile_updated(user_id: UUID) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.PROFILE_UPDATED,
            user_id=user_id,
            description="Profile updated",
            is_user_action=True,
        )

    @staticmethod
    def expense_added(
        user_id: UUID,
        expense_id: UUID,
        category: str,
        amount: str,
    ) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.EXPENSE_ADDED,
            user_id=user_id,
            description="Expense added",
            details={
                "expense_id": str(expense_id),
                "category": category,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def budget_exceeded(user_id: UUID, total: str, income: str) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.BUDGET_EXCEEDED,
            severity=EventSeverity.WARNING,
            user_id=user_id,
            description="Expenses exceed monthly income",
            details={"total": total, "income": income},
        )

    @staticmethod
    def save_failed(key: str, error_message: str) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.SAVE_FAILED,
            severity=EventSeverity.ERROR,
            description=f"Failed to persist '{key}'; in-memory state kept",
            details={"key": key},
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.SYSTEM_ERROR,
            severity=EventSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )

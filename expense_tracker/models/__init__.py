"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
All data flowing through the system must conform to these schemas.
"""

from expense_tracker.models.user import (
    ALL_CATEGORIES,
    Expense,
    User,
    UserProfile,
    decode_users,
    encode_users,
)
from expense_tracker.models.forms import (
    ExpenseForm,
    ProfileForm,
    RegistrationForm,
    SignInForm,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.models.events import (
    EventSeverity,
    StoreEvent,
    StoreEventBuilder,
    StoreEventType,
)

__all__ = [
    # User models
    "ALL_CATEGORIES",
    "Expense",
    "User",
    "UserProfile",
    "decode_users",
    "encode_users",
    # Forms
    "ExpenseForm",
    "ProfileForm",
    "RegistrationForm",
    "SignInForm",
    "ValidationIssue",
    "ValidationResult",
    # Events
    "EventSeverity",
    "StoreEvent",
    "StoreEventBuilder",
    "StoreEventType",
]

"""
Core Data Models for Expense Tracker

These models define the schemas for users and their expenses.
They are designed to:
1. Enforce type safety at runtime
2. Be serializable for the key-value blob store
3. Be treated as immutable snapshots (updates produce copies)

DESIGN DECISION: Expense amounts are NOT sign-checked.
A negative amount is a refund or correction and is accepted as-is.
Salary, on the other hand, can never be negative.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

import structlog
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
)


# Sentinel category meaning "no filter" in category filters
ALL_CATEGORIES = "All"


# =============================================================================
# EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    A single recorded expense.

    Expenses are owned by exactly one User and are never edited
    or removed once created.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique expense ID"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Free-text category label (case-sensitive)"
    )
    amount: Decimal = Field(
        ...,
        description="Amount spent; sign is not constrained"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the expense was recorded"
    )


# =============================================================================
# USER MODELS
# =============================================================================

class UserProfile(BaseModel):
    """
    Profile fields entered at sign-up and on the profile tab.

    Text fields are plain and only checked for presence at the
    entry points (see expense_tracker.validation).
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str
    age: int = Field(..., ge=0, le=150)
    gender: str
    marital_status: str
    phone: str
    email: str
    monthly_salary: Decimal = Field(
        ...,
        ge=0,
        description="Monthly income used for budget comparisons"
    )


class User(UserProfile):
    """
    A registered user and the expenses they own.

    Users are never deleted. Updates go through with_profile() and
    with_expense(), which return new objects so snapshots handed
    out by the store are never mutated behind a caller's back.
    """

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique user ID"
    )
    expenses: list[Expense] = Field(default_factory=list)

    @property
    def profile(self) -> UserProfile:
        """Profile fields only, without identity or expenses."""
        return UserProfile(**self.model_dump(include=set(UserProfile.model_fields)))

    def email_matches(self, email: str) -> bool:
        """Case-insensitive email comparison."""
        return self.email.casefold() == email.strip().casefold()

    def with_profile(self, profile: UserProfile) -> "User":
        """Copy with every profile field replaced; id and expenses kept."""
        return self.model_copy(update=profile.model_dump())

    def with_expense(self, expense: Expense) -> "User":
        """Copy with the expense appended to the end of the list."""
        return self.model_copy(update={"expenses": [*self.expenses, expense]})

    @classmethod
    def from_profile(cls, profile: UserProfile, user_id: Optional[UUID] = None) -> "User":
        """Create a new user with an empty expense list."""
        data = profile.model_dump()
        if user_id is not None:
            data["id"] = user_id
        return cls(**data)


# =============================================================================
# SERIALIZATION
# =============================================================================

_USER_LIST_ADAPTER = TypeAdapter(list[User])

logger = structlog.get_logger(__name__)


def encode_users(users: list[User]) -> str:
    """Serialize the user set to the JSON text stored in the blob store."""
    return _USER_LIST_ADAPTER.dump_json(users).decode("utf-8")


def decode_users(blob: str) -> list[User]:
    """
    Deserialize the user set.

    User ids are unique within the store: when a blob repeats an id,
    the first record wins and later ones are dropped.

    Raises pydantic.ValidationError if the blob is not a valid user list.
    """
    users: list[User] = []
    seen: set[UUID] = set()
    for user in _USER_LIST_ADAPTER.validate_json(blob):
        if user.id in seen:
            logger.warning("duplicate_user_id_dropped", user_id=str(user.id))
            continue
        seen.add(user.id)
        users.append(user)
    return users

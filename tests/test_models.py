"""
Tests for Expense Tracker models

Test strategy:
1. Unit tests for individual components (models, validators, aggregator)
2. Store and flow tests against the in-memory blob store
3. No real files outside tmp_path, no network
"""

import json
from datetime import datetime
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from expense_tracker.models import (
    EventSeverity,
    Expense,
    StoreEvent,
    StoreEventBuilder,
    StoreEventType,
    User,
    UserProfile,
    ValidationIssue,
    ValidationResult,
    decode_users,
    encode_users,
)
from tests.conftest import make_profile


class TestExpenseModel:
    """Tests for the Expense model."""

    def test_expense_defaults(self):
        """Test id and timestamp are filled in."""
        before = datetime.now()
        expense = Expense(category="Food", amount=Decimal("250.00"))
        assert expense.id is not None
        assert expense.timestamp >= before

    def test_expense_strips_category(self):
        """Test that whitespace is stripped from the category."""
        expense = Expense(category="  Food  ", amount=Decimal("1"))
        assert expense.category == "Food"

    def test_expense_accepts_negative_amount(self):
        """Negative amounts (refunds) are not rejected."""
        expense = Expense(category="Refund", amount=Decimal("-120"))
        assert expense.amount == Decimal("-120")

    def test_expense_rejects_empty_category(self):
        with pytest.raises(ValidationError):
            Expense(category="   ", amount=Decimal("1"))


class TestUserModels:
    """Tests for UserProfile and User."""

    def test_profile_rejects_negative_salary(self):
        with pytest.raises(ValueError):
            make_profile(salary="-1")

    def test_from_profile_starts_without_expenses(self):
        user = User.from_profile(make_profile())
        assert user.expenses == []
        assert user.email == "asha@example.com"
        assert user.gender == "Female"
        assert user.marital_status == "Single"
        assert user.age == 29

    def test_from_profile_keeps_given_id(self):
        user_id = uuid4()
        user = User.from_profile(make_profile(), user_id=user_id)
        assert user.id == user_id

    def test_email_matches_is_case_insensitive(self):
        user = User.from_profile(make_profile(email="Asha@Example.com"))
        assert user.email_matches("asha@example.COM")
        assert user.email_matches("  ASHA@EXAMPLE.COM ")
        assert not user.email_matches("other@example.com")

    def test_with_expense_returns_copy(self):
        user = User.from_profile(make_profile())
        expense = Expense(category="Food", amount=Decimal("10"))
        updated = user.with_expense(expense)
        assert updated.expenses == [expense]
        assert user.expenses == []
        assert updated.id == user.id

    def test_with_profile_replaces_fields_keeps_identity(self):
        user = User.from_profile(make_profile()).with_expense(
            Expense(category="Food", amount=Decimal("10"))
        )
        new_profile = make_profile(name="Asha R", salary="60000")
        updated = user.with_profile(new_profile)
        assert updated.name == "Asha R"
        assert updated.monthly_salary == Decimal("60000")
        assert updated.id == user.id
        assert updated.expenses == user.expenses

    def test_profile_property(self):
        profile = make_profile()
        user = User.from_profile(profile)
        assert user.profile == profile
        assert isinstance(user.profile, UserProfile)


class TestSerialization:
    """Tests for the user set encoding."""

    def test_round_trip_preserves_users_and_expense_order(self):
        first = User.from_profile(make_profile()).with_expense(
            Expense(category="Food", amount=Decimal("20000.50"))
        ).with_expense(
            Expense(category="Rent", amount=Decimal("25000"))
        )
        second = User.from_profile(make_profile(email="ravi@example.com", name="Ravi"))

        decoded = decode_users(encode_users([first, second]))

        assert decoded == [first, second]
        assert [e.category for e in decoded[0].expenses] == ["Food", "Rent"]
        assert decoded[0].expenses[0].amount == Decimal("20000.50")

    def test_encoded_blob_is_json_array(self):
        blob = encode_users([User.from_profile(make_profile())])
        data = json.loads(blob)
        assert isinstance(data, list)
        assert data[0]["email"] == "asha@example.com"
        assert data[0]["expenses"] == []

    def test_decode_drops_repeated_ids(self):
        first = User.from_profile(make_profile())
        copy = first.with_profile(make_profile(name="Duplicate"))
        other = User.from_profile(make_profile(email="ravi@example.com", name="Ravi"))

        decoded = decode_users(encode_users([first, copy, other]))

        assert decoded == [first, other]

    def test_decode_rejects_garbage(self):
        with pytest.raises(ValueError):
            decode_users("{not json")

    def test_decode_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            decode_users('{"users": []}')


class TestStoreEvents:
    """Tests for store event models."""

    def test_store_event_creation(self):
        event = StoreEvent(
            event_type=StoreEventType.USER_SIGNED_OUT,
            description="User signed out",
        )
        assert event.severity == EventSeverity.INFO
        assert event.user_id is None

    def test_store_event_to_log_dict(self):
        user_id = uuid4()
        event = StoreEventBuilder.expense_added(
            user_id=user_id,
            expense_id=uuid4(),
            category="Food",
            amount="250",
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "expense_added"
        assert log_dict["user_id"] == str(user_id)
        assert log_dict["details"]["category"] == "Food"
        assert log_dict["is_user_action"] is True

    def test_builder_budget_exceeded_is_warning(self):
        event = StoreEventBuilder.budget_exceeded(uuid4(), total="55000", income="50000")
        assert event.event_type == StoreEventType.BUDGET_EXCEEDED
        assert event.severity == EventSeverity.WARNING

    def test_builder_handles_unbounded_values(self):
        """Event construction never fails on long categories or amounts."""
        event = StoreEventBuilder.expense_added(
            user_id=uuid4(),
            expense_id=uuid4(),
            category="Food" * 300,
            amount="9" * 490,
        )
        assert event.details["amount"] == "9" * 490
        assert StoreEventBuilder.budget_exceeded(uuid4(), "9" * 600, "1").details["total"] == "9" * 600

    def test_builder_save_failed_carries_error(self):
        event = StoreEventBuilder.save_failed("users", "disk full")
        assert event.severity == EventSeverity.ERROR
        assert event.error_message == "disk full"
        assert event.details["key"] == "users"


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        result = ValidationResult(issues=[
            ValidationIssue(
                field="age",
                issue_type="invalid_number",
                message="Age must be a whole number",
            ),
        ])
        assert result.has_errors is True
        assert result.is_valid is False
        assert result.error_count == 1

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(issues=[
            ValidationIssue(
                field="email",
                issue_type="suspicious_value",
                message="Email does not look like an email address",
                severity="warning",
            ),
        ])
        assert result.has_errors is False
        assert result.error_count == 0
        assert result.messages == ["Email does not look like an email address"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

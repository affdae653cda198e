"""
Form and Validation Models

Forms hold exactly what the user typed: every field is raw text.
They are turned into typed models (UserProfile, Expense) only after
InputValidator has checked them.

DESIGN DECISION: Validation never silently fixes input.
Problems are reported as ValidationIssues and shown to the user.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# RAW INPUT FORMS
# =============================================================================

class ProfileForm(BaseModel):
    """Profile fields as typed on the sign-up or profile screen."""

    name: str = ""
    age: str = ""
    gender: str = ""
    marital_status: str = ""
    phone: str = ""
    email: str = ""
    monthly_salary: str = ""


class RegistrationForm(ProfileForm):
    """Sign-up screen: profile plus password and its confirmation."""

    password: str = ""
    confirm_password: str = ""


class SignInForm(BaseModel):
    """Sign-in screen."""

    email: str = ""
    password: str = ""


class ExpenseForm(BaseModel):
    """Add-expense dialog."""

    category: str = ""
    amount: str = ""
    timestamp: Optional[datetime] = None


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_number', 'mismatch')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Result of checking one form."""

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def messages(self) -> list[str]:
        return [issue.message for issue in self.issues]

"""
Input Validation

DESIGN DECISION: Raw form text is checked before anything reaches the
record store. The check collects every problem at once instead of
stopping at the first, so the user can fix the whole form in one go.

RULES:
- Required text fields must be non-empty after stripping
- Age must be a whole number >= 0
- Salary must be a number >= 0
- Expense amount must be a number (negative amounts are allowed)
- Password must be non-empty and match its confirmation
- An email without "@" is only a warning (emails are plain text)

IMPORTANT: Validation NEVER silently fixes issues.
It reports them, and a failing form never mutates state.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import ValidationError

from expense_tracker.models.forms import (
    ExpenseForm,
    ProfileForm,
    RegistrationForm,
    SignInForm,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.models.user import Expense, UserProfile


PROFILE_TEXT_FIELDS = {
    "name": "Name",
    "gender": "Gender",
    "marital_status": "Marital status",
    "phone": "Phone number",
    "email": "Email",
}


class ValidationFailedError(Exception):
    """User input failed validation. The message is user-facing."""

    def __init__(self, result: ValidationResult):
        self.result = result
        errors = [issue.message for issue in result.issues if issue.severity == "error"]
        super().__init__("; ".join(errors) or "Invalid input")

    @property
    def issues(self) -> list[ValidationIssue]:
        return self.result.issues


def parse_decimal(text: str) -> Optional[Decimal]:
    """Parse user-typed money ("1,250.50"). None if not a finite number."""
    cleaned = text.strip().replace(",", "")
    if not cleaned:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def result_from_model_error(error: ValidationError) -> ValidationResult:
    """Report a model constraint the form checks did not catch as issues."""
    issues = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "form"
        label = PROFILE_TEXT_FIELDS.get(field, field.replace("_", " ").capitalize())
        issues.append(ValidationIssue(
            field=field,
            issue_type="invalid_value",
            message=f"{label}: {item['msg']}",
        ))
    return ValidationResult(issues=issues)


class InputValidator:
    """
    Checks raw forms and converts them to typed models.

    check_* methods report issues; to_* methods raise
    ValidationFailedError on any error-level issue.
    """

    def _require(self, issues: list[ValidationIssue], field: str, label: str, value: str) -> bool:
        if value.strip():
            return True
        issues.append(ValidationIssue(
            field=field,
            issue_type="missing",
            message=f"{label} is required",
        ))
        return False

    def _check_profile_fields(self, form: ProfileForm) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []

        for field, label in PROFILE_TEXT_FIELDS.items():
            self._require(issues, field, label, getattr(form, field))

        if form.email.strip() and "@" not in form.email:
            issues.append(ValidationIssue(
                field="email",
                issue_type="suspicious_value",
                message="Email does not look like an email address",
                severity="warning",
            ))

        if self._require(issues, "age", "Age", form.age):
            try:
                age = int(form.age.strip())
            except ValueError:
                issues.append(ValidationIssue(
                    field="age",
                    issue_type="invalid_number",
                    message="Age must be a whole number",
                ))
            else:
                if not 0 <= age <= 150:
                    issues.append(ValidationIssue(
                        field="age",
                        issue_type="out_of_range",
                        message="Age must be between 0 and 150",
                    ))

        if self._require(issues, "monthly_salary", "Monthly salary", form.monthly_salary):
            salary = parse_decimal(form.monthly_salary)
            if salary is None:
                issues.append(ValidationIssue(
                    field="monthly_salary",
                    issue_type="invalid_number",
                    message="Monthly salary must be a number",
                ))
            elif salary < 0:
                issues.append(ValidationIssue(
                    field="monthly_salary",
                    issue_type="out_of_range",
                    message="Monthly salary cannot be negative",
                ))

        return issues

    def check_profile(self, form: ProfileForm) -> ValidationResult:
        return ValidationResult(issues=self._check_profile_fields(form))

    def check_registration(self, form: RegistrationForm) -> ValidationResult:
        issues = self._check_profile_fields(form)

        if self._require(issues, "password", "Password", form.password):
            if form.password != form.confirm_password:
                issues.append(ValidationIssue(
                    field="confirm_password",
                    issue_type="mismatch",
                    message="Passwords do not match",
                ))

        return ValidationResult(issues=issues)

    def check_sign_in(self, form: SignInForm) -> ValidationResult:
        issues: list[ValidationIssue] = []
        self._require(issues, "email", "Email", form.email)
        self._require(issues, "password", "Password", form.password)
        return ValidationResult(issues=issues)

    def check_expense(self, form: ExpenseForm) -> ValidationResult:
        issues: list[ValidationIssue] = []
        self._require(issues, "category", "Category", form.category)
        if self._require(issues, "amount", "Amount", form.amount):
            if parse_decimal(form.amount) is None:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_number",
                    message="Amount must be a number",
                ))
        return ValidationResult(issues=issues)

    def to_profile(self, form: ProfileForm) -> UserProfile:
        """
        Convert a profile (or registration) form.

        Every field lands in its own slot: gender into gender,
        marital status into marital_status.

        Raises:
            ValidationFailedError: If the form has any error-level issue
        """
        if isinstance(form, RegistrationForm):
            result = self.check_registration(form)
        else:
            result = self.check_profile(form)
        if result.has_errors:
            raise ValidationFailedError(result)

        try:
            return UserProfile(
                name=form.name,
                age=int(form.age.strip()),
                gender=form.gender,
                marital_status=form.marital_status,
                phone=form.phone,
                email=form.email,
                monthly_salary=parse_decimal(form.monthly_salary),
            )
        except ValidationError as e:
            raise ValidationFailedError(result_from_model_error(e)) from e

    def to_expense(self, form: ExpenseForm) -> Expense:
        """
        Convert an add-expense form.

        Raises:
            ValidationFailedError: If category or amount is invalid
        """
        result = self.check_expense(form)
        if result.has_errors:
            raise ValidationFailedError(result)

        data = {"category": form.category, "amount": parse_decimal(form.amount)}
        if form.timestamp is not None:
            data["timestamp"] = form.timestamp
        try:
            return Expense(**data)
        except ValidationError as e:
            raise ValidationFailedError(result_from_model_error(e)) from e

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """
        Summarize a result for display under a form.
        """
        if not result.issues:
            return "✅ All fields look good."

        lines = []
        errors = [i for i in result.issues if i.severity == "error"]
        warnings = [i for i in result.issues if i.severity == "warning"]

        if errors:
            lines.append("❌ Please fix the following:")
            lines.extend(f"   • {issue.message}" for issue in errors)

        if warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please double-check:")
            lines.extend(f"   • {issue.message}" for issue in warnings)

        return "\n".join(lines)

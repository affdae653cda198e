"""Input validation package."""

from expense_tracker.validation.validator import (
    InputValidator,
    ValidationFailedError,
    parse_decimal,
)

__all__ = ["InputValidator", "ValidationFailedError", "parse_decimal"]

"""
Expense Aggregation

DESIGN DECISION: Every figure shown on the dashboard is derived here
by pure functions. Nothing in this module mutates its input or touches
storage, so the same expense list always yields the same numbers.

All arithmetic is Decimal; floats only appear at the chart boundary.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from expense_tracker.models.user import ALL_CATEGORIES, Expense, User


ZERO = Decimal("0")
HUNDRED = Decimal("100")


# =============================================================================
# CORE FIGURES
# =============================================================================

def total_expenses(expenses: Iterable[Expense]) -> Decimal:
    """Sum of all expense amounts."""
    return sum((expense.amount for expense in expenses), ZERO)


def total_income(user: User) -> Decimal:
    """Monthly income is the user's salary."""
    return user.monthly_salary


def category_breakdown(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """
    Sum amounts per category.

    Labels are matched exactly (case-sensitive). Keys come out in the
    order each category first appears.
    """
    groups: dict[str, Decimal] = {}
    for expense in expenses:
        groups[expense.category] = groups.get(expense.category, ZERO) + expense.amount
    return groups


def filter_by_category(expenses: Sequence[Expense], category: str) -> list[Expense]:
    """Expenses in one category, or all of them for "All"."""
    if category == ALL_CATEGORIES:
        return list(expenses)
    return [expense for expense in expenses if expense.category == category]


def spending_percentage(total: Decimal, income: Decimal) -> Decimal:
    """Share of income spent, in percent. Zero income gives 0."""
    if income == 0:
        return ZERO
    return total / income * HUNDRED


def savings_delta(income: Decimal, total: Decimal) -> Decimal:
    """Positive means surplus, negative means deficit."""
    return income - total


def budget_exceeded(total: Decimal, income: Decimal) -> bool:
    return total > income


# =============================================================================
# REPORTS & INSIGHTS
# =============================================================================

def category_percentages(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Each category's share of total spending, in percent."""
    breakdown = category_breakdown(expenses)
    total = sum(breakdown.values(), ZERO)
    if total == 0:
        return {category: ZERO for category in breakdown}
    return {
        category: amount / total * HUNDRED
        for category, amount in breakdown.items()
    }


def sorted_breakdown(
    expenses: Iterable[Expense],
    descending: bool = True,
) -> list[tuple[str, Decimal]]:
    """Category breakdown ordered by amount (ties keep first-seen order)."""
    return sorted(
        category_breakdown(expenses).items(),
        key=lambda item: item[1],
        reverse=descending,
    )


def top_category(expenses: Iterable[Expense]) -> Optional[tuple[str, Decimal]]:
    """Category with the highest total, or None when there are no expenses."""
    ranked = sorted_breakdown(expenses)
    return ranked[0] if ranked else None


def monthly_totals(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Spending per calendar month, keyed "YYYY-MM", oldest first."""
    groups: dict[str, Decimal] = {}
    for expense in expenses:
        key = expense.timestamp.strftime("%Y-%m")
        groups[key] = groups.get(key, ZERO) + expense.amount
    return dict(sorted(groups.items()))


def _previous_month(month: str) -> str:
    year, mon = (int(part) for part in month.split("-"))
    if mon == 1:
        return f"{year - 1}-12"
    return f"{year}-{mon - 1:02d}"


def month_over_month_change(
    expenses: Iterable[Expense],
    month: str,
) -> Optional[Decimal]:
    """
    Percent change in spending from the previous month to `month`.

    Args:
        expenses: Expenses to compare
        month: Month of interest as "YYYY-MM"

    Returns:
        Percent change, or None when the previous month has no spending
        to compare against
    """
    totals = monthly_totals(expenses)
    previous = totals.get(_previous_month(month), ZERO)
    if previous == 0:
        return None
    current = totals.get(month, ZERO)
    return (current - previous) / previous * HUNDRED


def recent_expenses(expenses: Iterable[Expense], limit: int = 5) -> list[Expense]:
    """Newest expenses first."""
    return sorted(expenses, key=lambda e: e.timestamp, reverse=True)[:limit]


# =============================================================================
# DASHBOARD SUMMARY
# =============================================================================

class DashboardSummary(BaseModel):
    """Figures shown on the home tab."""

    income: Decimal
    total_expenses: Decimal
    savings: Decimal
    spending_percentage: Decimal
    budget_exceeded: bool
    expense_count: int = Field(ge=0)
    breakdown: dict[str, Decimal] = Field(default_factory=dict)


def summarize(user: User) -> DashboardSummary:
    """Compute every home-tab figure for one user."""
    income = total_income(user)
    total = total_expenses(user.expenses)
    return DashboardSummary(
        income=income,
        total_expenses=total,
        savings=savings_delta(income, total),
        spending_percentage=spending_percentage(total, income),
        budget_exceeded=budget_exceeded(total, income),
        expense_count=len(user.expenses),
        breakdown=category_breakdown(user.expenses),
    )

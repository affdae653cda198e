"""Tests for the pure aggregation functions."""

from datetime import datetime
from decimal import Decimal

import pytest

from expense_tracker.insights import (
    DashboardSummary,
    budget_exceeded,
    category_breakdown,
    category_percentages,
    filter_by_category,
    month_over_month_change,
    monthly_totals,
    recent_expenses,
    savings_delta,
    sorted_breakdown,
    spending_percentage,
    summarize,
    top_category,
    total_expenses,
    total_income,
)
from expense_tracker.models import ALL_CATEGORIES, Expense, User
from tests.conftest import make_profile


def expense(category: str, amount: str, when: datetime = None) -> Expense:
    if when is None:
        return Expense(category=category, amount=Decimal(amount))
    return Expense(category=category, amount=Decimal(amount), timestamp=when)


@pytest.fixture
def expenses():
    return [
        expense("Food", "200.50"),
        expense("Rent", "12000"),
        expense("food", "99.50"),
        expense("Food", "300"),
        expense("Refund", "-50"),
    ]


class TestTotals:
    def test_total_expenses_is_sum_of_amounts(self, expenses):
        assert total_expenses(expenses) == sum(e.amount for e in expenses)
        assert total_expenses(expenses) == Decimal("12550.00")

    def test_total_expenses_empty(self):
        assert total_expenses([]) == Decimal("0")

    def test_total_income_is_salary(self):
        user = User.from_profile(make_profile(salary="42000"))
        assert total_income(user) == Decimal("42000")


class TestCategoryBreakdown:
    def test_groups_case_sensitively_in_first_seen_order(self, expenses):
        breakdown = category_breakdown(expenses)
        assert list(breakdown) == ["Food", "Rent", "food", "Refund"]
        assert breakdown["Food"] == Decimal("500.50")
        assert breakdown["food"] == Decimal("99.50")

    def test_groups_sum_to_total(self, expenses):
        assert sum(category_breakdown(expenses).values()) == total_expenses(expenses)

    def test_does_not_mutate_input(self, expenses):
        before = list(expenses)
        category_breakdown(expenses)
        assert expenses == before

    def test_sorted_breakdown_descending(self, expenses):
        ranked = sorted_breakdown(expenses)
        assert ranked[0] == ("Rent", Decimal("12000"))
        assert ranked[-1] == ("Refund", Decimal("-50"))

    def test_top_category(self, expenses):
        assert top_category(expenses) == ("Rent", Decimal("12000"))
        assert top_category([]) is None

    def test_category_percentages(self):
        shares = category_percentages([expense("Food", "25"), expense("Rent", "75")])
        assert shares == {"Food": Decimal("25"), "Rent": Decimal("75")}

    def test_category_percentages_zero_total(self):
        shares = category_percentages([expense("Food", "10"), expense("Refund", "-10")])
        assert shares == {"Food": Decimal("0"), "Refund": Decimal("0")}


class TestFilterByCategory:
    def test_all_returns_everything_in_order(self, expenses):
        result = filter_by_category(expenses, ALL_CATEGORIES)
        assert result == expenses
        assert all(a is b for a, b in zip(result, expenses))

    def test_all_on_empty_list(self):
        assert filter_by_category([], ALL_CATEGORIES) == []

    def test_exact_match_only(self, expenses):
        result = filter_by_category(expenses, "Food")
        assert [e.amount for e in result] == [Decimal("200.50"), Decimal("300")]

    def test_unknown_category(self, expenses):
        assert filter_by_category(expenses, "Travel") == []


class TestRatios:
    @pytest.mark.parametrize("total", [Decimal("0"), Decimal("123.45"), Decimal("-10")])
    def test_spending_percentage_zero_income(self, total):
        assert spending_percentage(total, Decimal("0")) == Decimal("0")

    def test_spending_percentage(self):
        assert spending_percentage(Decimal("45000"), Decimal("50000")) == Decimal("90")

    def test_savings_delta_sign(self):
        assert savings_delta(Decimal("50000"), Decimal("45000")) == Decimal("5000")
        assert savings_delta(Decimal("50000"), Decimal("55000")) == Decimal("-5000")

    def test_budget_exceeded_scenario(self):
        income = Decimal("50000")
        assert budget_exceeded(Decimal("20000"), income) is False
        assert budget_exceeded(Decimal("45000"), income) is False
        assert budget_exceeded(Decimal("50000"), income) is False
        assert budget_exceeded(Decimal("55000"), income) is True


class TestMonthly:
    def test_monthly_totals_chronological(self):
        items = [
            expense("Food", "10", datetime(2026, 3, 5)),
            expense("Food", "20", datetime(2026, 1, 9)),
            expense("Rent", "30", datetime(2026, 3, 1)),
        ]
        assert monthly_totals(items) == {
            "2026-01": Decimal("20"),
            "2026-03": Decimal("40"),
        }
        assert list(monthly_totals(items)) == ["2026-01", "2026-03"]

    def test_month_over_month_change(self):
        items = [
            expense("Food", "100", datetime(2026, 4, 10)),
            expense("Food", "150", datetime(2026, 5, 10)),
        ]
        assert month_over_month_change(items, "2026-05") == Decimal("50")

    def test_month_over_month_across_year_boundary(self):
        items = [
            expense("Food", "200", datetime(2025, 12, 31)),
            expense("Food", "100", datetime(2026, 1, 1)),
        ]
        assert month_over_month_change(items, "2026-01") == Decimal("-50")

    def test_month_over_month_without_previous(self):
        items = [expense("Food", "100", datetime(2026, 5, 10))]
        assert month_over_month_change(items, "2026-05") is None

    def test_recent_expenses_newest_first(self):
        old = expense("Food", "1", datetime(2026, 1, 1))
        mid = expense("Food", "2", datetime(2026, 2, 1))
        new = expense("Food", "3", datetime(2026, 3, 1))
        assert recent_expenses([old, new, mid], limit=2) == [new, mid]


class TestSummary:
    def test_summarize(self):
        user = User.from_profile(make_profile(salary="50000"))
        for item in [expense("Food", "20000"), expense("Rent", "25000"), expense("Transport", "10000")]:
            user = user.with_expense(item)

        summary = summarize(user)

        assert isinstance(summary, DashboardSummary)
        assert summary.income == Decimal("50000")
        assert summary.total_expenses == Decimal("55000")
        assert summary.savings == Decimal("-5000")
        assert summary.spending_percentage == Decimal("110")
        assert summary.budget_exceeded is True
        assert summary.expense_count == 3
        assert list(summary.breakdown) == ["Food", "Rent", "Transport"]

    def test_summarize_new_user(self):
        summary = summarize(User.from_profile(make_profile(salary="0")))
        assert summary.total_expenses == Decimal("0")
        assert summary.spending_percentage == Decimal("0")
        assert summary.budget_exceeded is False

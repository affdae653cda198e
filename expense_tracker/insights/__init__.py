"""Expense aggregation package."""

from expense_tracker.insights.aggregator import (
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

__all__ = [
    "DashboardSummary",
    "budget_exceeded",
    "category_breakdown",
    "category_percentages",
    "filter_by_category",
    "month_over_month_change",
    "monthly_totals",
    "recent_expenses",
    "savings_delta",
    "sorted_breakdown",
    "spending_percentage",
    "summarize",
    "top_category",
    "total_expenses",
    "total_income",
]

"""Aggregation views over the expense list."""

from expense_tracker.analytics.aggregations import (
    DashboardSummary,
    MonthlyTotal,
    category_breakdown,
    monthly_total,
    recent_expenses,
    six_month_trend,
    summarize_dashboard,
    total_spent,
)

__all__ = [
    "DashboardSummary",
    "MonthlyTotal",
    "category_breakdown",
    "monthly_total",
    "recent_expenses",
    "six_month_trend",
    "summarize_dashboard",
    "total_spent",
]

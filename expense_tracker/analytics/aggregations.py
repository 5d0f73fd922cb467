"""
Aggregation Views

Pure functions of (expenses, base_currency). Every total is computed
from scratch by reconverting each expense's own amount/currency into
the base currency; the stored amount_in_base is never used here.

"Now" is an argument (today) defaulting to the wall-clock date, so
month-relative views are deterministic under test.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from expense_tracker.models.currency import Currency, convert, round_half_up
from expense_tracker.models.expense import Expense, ExpenseCategory


MONTH_LABELS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

DEFAULT_TREND_MONTHS = 6
DEFAULT_RECENT_LIMIT = 5


class MonthlyTotal(BaseModel):
    """One bar of the spending trend."""

    label: str = Field(description="Short month name, e.g. 'Jan'")
    year: int
    month: int = Field(ge=1, le=12)
    amount: Decimal = Field(description="Total in base currency, rounded to whole units")


class DashboardSummary(BaseModel):
    """Everything the dashboard screen shows, in one value."""

    base_currency: Currency
    total_spent: Decimal
    monthly_spent: Decimal
    transaction_count: int
    recent: list[Expense]


def _sum_converted(expenses: Iterable[Expense], base_currency: Currency) -> Decimal:
    return sum(
        (convert(e.amount, e.currency, base_currency) for e in expenses),
        Decimal("0"),
    )


def _in_month(expense: Expense, year: int, month: int) -> bool:
    return expense.date.year == year and expense.date.month == month


def _shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Move (year, month) by offset months; offset may be negative."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def total_spent(expenses: Iterable[Expense], base_currency: Currency) -> Decimal:
    """Sum of all expenses in the base currency."""
    return _sum_converted(expenses, base_currency)


def monthly_total(
    expenses: Iterable[Expense],
    base_currency: Currency,
    today: Optional[date] = None,
) -> Decimal:
    """Sum of expenses dated in the current calendar month."""
    today = today or date.today()
    return _sum_converted(
        (e for e in expenses if _in_month(e, today.year, today.month)),
        base_currency,
    )


def category_breakdown(
    expenses: Iterable[Expense],
    base_currency: Currency,
) -> dict[ExpenseCategory, Decimal]:
    """
    Converted totals per category.

    Only categories present in the data appear, in order of first occurrence.
    """
    totals: dict[ExpenseCategory, Decimal] = {}
    for expense in expenses:
        value = convert(expense.amount, expense.currency, base_currency)
        totals[expense.category] = totals.get(expense.category, Decimal("0")) + value
    return totals


def six_month_trend(
    expenses: Iterable[Expense],
    base_currency: Currency,
    today: Optional[date] = None,
    months: int = DEFAULT_TREND_MONTHS,
) -> list[MonthlyTotal]:
    """
    Monthly totals for the calendar months ending with the current one.

    Oldest month first. Months without expenses report 0.
    Amounts are rounded half-up to whole units.
    """
    today = today or date.today()
    expenses = list(expenses)

    trend = []
    for offset in range(months - 1, -1, -1):
        year, month = _shift_month(today.year, today.month, -offset)
        total = _sum_converted(
            (e for e in expenses if _in_month(e, year, month)),
            base_currency,
        )
        trend.append(
            MonthlyTotal(
                label=MONTH_LABELS[month - 1],
                year=year,
                month=month,
                amount=round_half_up(total, Decimal("1")),
            )
        )
    return trend


def recent_expenses(
    expenses: Iterable[Expense],
    limit: Optional[int] = None,
) -> list[Expense]:
    """Expenses newest first by creation timestamp, optionally truncated."""
    ordered = sorted(expenses, key=lambda e: e.timestamp, reverse=True)
    if limit is not None:
        return ordered[:limit]
    return ordered


def summarize_dashboard(
    expenses: Iterable[Expense],
    base_currency: Currency,
    today: Optional[date] = None,
    recent_limit: int = DEFAULT_RECENT_LIMIT,
) -> DashboardSummary:
    """Totals, count and recent activity for the dashboard."""
    expenses = list(expenses)
    return DashboardSummary(
        base_currency=base_currency,
        total_spent=total_spent(expenses, base_currency),
        monthly_spent=monthly_total(expenses, base_currency, today=today),
        transaction_count=len(expenses),
        recent=recent_expenses(expenses, limit=recent_limit),
    )

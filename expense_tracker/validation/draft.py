"""
Add-Expense Form Validation

DESIGN DECISION: Invalid form input never produces an error message.
If the amount or description is missing (or the amount is not a
positive number) the add operation is simply not attempted and the
form stays open. The only output is "a draft" or "nothing".
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from pydantic import ValidationError

from expense_tracker.models.currency import Currency
from expense_tracker.models.expense import ExpenseCategory, ExpenseDraft


def parse_amount(raw: Union[str, int, float, Decimal, None]) -> Optional[Decimal]:
    """Parse a user-entered amount. Returns None for blank or non-numeric input."""
    if raw is None:
        return None
    if isinstance(raw, float):
        raw = str(raw)
    if isinstance(raw, str):
        raw = raw.strip().replace(",", "")
        if not raw:
            return None
    try:
        value = Decimal(raw)
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def build_draft(
    amount: Union[str, int, float, Decimal, None],
    description: Optional[str],
    currency: Currency = Currency.USD,
    category: ExpenseCategory = ExpenseCategory.OTHER,
    expense_date: Optional[date] = None,
) -> Optional[ExpenseDraft]:
    """
    Turn raw add-expense form values into a draft.

    Returns None when the expense should not be added.
    """
    parsed_amount = parse_amount(amount)
    if parsed_amount is None or parsed_amount <= 0:
        return None
    if not description or not description.strip():
        return None

    fields = {
        "amount": parsed_amount,
        "currency": currency,
        "category": category,
        "description": description,
    }
    if expense_date is not None:
        fields["date"] = expense_date

    try:
        return ExpenseDraft(**fields)
    except ValidationError:
        return None

"""
Core Data Models for Expense Tracker

These models define the schemas for every expense flowing through the
system. They are designed to:
1. Enforce type safety at runtime
2. Be serializable for local storage (camelCase JSON layout)
3. Keep stored expenses immutable once created

DESIGN DECISION: We use Pydantic v2. An ExpenseDraft is what the user
typed; an Expense is what the store created from it. Only the store
assigns id, timestamp and the base-currency amount.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from expense_tracker.models.currency import Currency


# Largest amount a single expense may record, in its own currency
MAX_AMOUNT = Decimal("1000000000000")


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Supported expense categories.

    Values are the human-readable labels; they are also what gets persisted.
    """
    FOOD = "Food & Drink"
    TRANSPORT = "Transport"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    BILLS = "Bills & Utilities"
    HEALTH = "Health"
    TRAVEL = "Travel"
    OTHER = "Other"


# =============================================================================
# EXPENSE MODELS
# =============================================================================

class ExpenseDraft(BaseModel):
    """
    User-entered expense fields.

    This is PROPOSED data from the add-expense form. It becomes an
    Expense only through ExpenseStore.add().
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    amount: Decimal = Field(
        ...,
        gt=0,
        le=MAX_AMOUNT,
        description="Amount in the expense's own currency"
    )
    currency: Currency = Field(
        default=Currency.USD,
        description="Currency the expense was paid in"
    )
    category: ExpenseCategory = Field(
        default=ExpenseCategory.OTHER,
        description="Spending category"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="What the money was spent on"
    )
    date: dt.date = Field(
        default_factory=dt.date.today,
        description="Date the expense happened (user-entered)"
    )


class Expense(BaseModel):
    """
    A recorded expense.

    Expenses are frozen: they are created once and can only be deleted.

    amount_in_base caches the USD value at creation time. It is an audit
    field only; display always reconverts amount/currency into the
    currently selected base currency.
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique expense identifier"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        le=MAX_AMOUNT,
        description="Amount in the expense's own currency"
    )
    currency: Currency
    amount_in_base: Decimal = Field(
        ...,
        description="Amount converted to USD when the expense was created"
    )
    category: ExpenseCategory
    description: str = Field(
        ...,
        min_length=1,
    )
    date: dt.date
    timestamp: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc),
        description="Creation instant, used for recency ordering"
    )

    def to_storage_dict(self) -> dict:
        """Serialize using the persisted (camelCase, JSON-safe) layout."""
        return self.model_dump(mode="json", by_alias=True)

    @property
    def summary_line(self) -> str:
        """One-line description used in prompts and lists."""
        return (
            f"{self.date.isoformat()}: {self.description} "
            f"({self.amount} {self.currency.value}) [{self.category.value}]"
        )

"""
Tests for Expense Tracker models

Test strategy:
1. Unit tests for the currency model and pydantic models
2. Integration tests for flows (with in-memory storage)
3. No real API calls in tests (the Gemini model is faked)
"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal
from itertools import product
from uuid import uuid4

from pydantic import ValidationError

from expense_tracker.models.currency import (
    Currency,
    CENTS,
    RATES,
    convert,
    format_amount,
    round_half_up,
    symbol,
)
from expense_tracker.models.expense import (
    MAX_AMOUNT,
    Expense,
    ExpenseCategory,
    ExpenseDraft,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestCurrencyConversion:
    """Tests for the fixed-rate conversion table."""

    @pytest.mark.parametrize("currency", list(Currency))
    def test_same_currency_is_identity(self, currency):
        """Same-currency conversion returns the amount unchanged."""
        amount = Decimal("123.456789")
        assert convert(amount, currency, currency) == amount
        assert convert(amount, currency, currency) is amount

    def test_usd_to_eur(self):
        """Test conversion out of the pivot currency."""
        assert convert(Decimal("100"), Currency.USD, Currency.EUR) == Decimal("92")

    def test_eur_to_usd(self):
        """Test conversion into the pivot currency."""
        result = convert(Decimal("92"), Currency.EUR, Currency.USD)
        assert result == Decimal("100")

    def test_conversion_pivots_through_usd(self):
        """A direct conversion equals the conversion via USD."""
        amount = Decimal("250")
        direct = convert(amount, Currency.INR, Currency.NOK)
        via_usd = convert(
            convert(amount, Currency.INR, Currency.USD),
            Currency.USD,
            Currency.NOK,
        )
        assert abs(direct - via_usd) < Decimal("1e-20")

    def test_chained_conversion_matches_direct(self):
        """convert(convert(x, A, B), B, C) is convert(x, A, C) within rounding."""
        amount = Decimal("87.65")
        for a, b, c in product(Currency, repeat=3):
            chained = convert(convert(amount, a, b), b, c)
            direct = convert(amount, a, c)
            assert abs(chained - direct) < Decimal("1e-9"), (a, b, c)

    def test_accepts_floats_and_ints(self):
        """Test that plain numbers are coerced without float artifacts."""
        assert convert(10, Currency.USD, Currency.DKK) == Decimal("68.50")
        assert convert(0.1, Currency.USD, Currency.USD) == Decimal("0.1")

    def test_accepts_currency_codes(self):
        """Test that string codes are accepted as currencies."""
        assert convert(Decimal("1"), "USD", "INR") == Decimal("83.5")

    def test_unknown_currency_rejected(self):
        """Currencies outside the table are a configuration error."""
        with pytest.raises(ValueError):
            convert(Decimal("1"), "GBP", Currency.USD)

    def test_rate_table_covers_every_currency(self):
        """Test that every currency has a rate and USD is the pivot."""
        assert set(RATES) == set(Currency)
        assert RATES[Currency.USD] == Decimal("1")


class TestCurrencyFormatting:
    """Tests for format_amount and symbol."""

    def test_zero_usd(self):
        assert format_amount(0, Currency.USD) == "$0.00"

    def test_grouping_and_two_decimals(self):
        assert format_amount(Decimal("1234.5"), Currency.USD) == "$1,234.50"
        assert format_amount(Decimal("1234567.891"), Currency.EUR) == "€1,234,567.89"

    def test_rounds_half_up(self):
        assert format_amount(Decimal("2.345"), Currency.USD) == "$2.35"
        assert format_amount(2.345, Currency.INR) == "₹2.35"

    def test_code_style_currencies(self):
        """Nordic crowns render with their code and a space."""
        assert format_amount(Decimal("80"), Currency.DKK) == "DKK 80.00"
        assert format_amount(Decimal("1500"), Currency.NOK) == "NOK 1,500.00"

    def test_negative_amount(self):
        assert format_amount(Decimal("-5"), Currency.EUR) == "-€5.00"

    def test_amount_beyond_default_precision(self):
        """Rounding never fails, however many digits the amount has."""
        huge = Decimal("1" + "0" * 30)
        assert format_amount(huge, Currency.USD) == "$1" + ",000" * 10 + ".00"
        assert format_amount(huge, Currency.DKK).startswith("DKK 1,000,")

    def test_round_half_up_keeps_all_digits(self):
        amount = Decimal("12345678901234567890123456789.005")
        assert round_half_up(amount, CENTS) == Decimal("12345678901234567890123456789.01")
        assert round_half_up(Decimal("2.5"), Decimal("1")) == Decimal("3")

    def test_symbols(self):
        assert symbol(Currency.EUR) == "€"
        assert symbol(Currency.USD) == "$"
        assert symbol(Currency.INR) == "₹"
        assert symbol(Currency.DKK) == "DKK"
        assert symbol(Currency.NOK) == "NOK"


class TestExpenseModels:
    """Tests for expense-related Pydantic models."""

    def test_draft_creation(self):
        """Test ExpenseDraft model creation."""
        draft = ExpenseDraft(
            amount=Decimal("12.50"),
            currency=Currency.EUR,
            category=ExpenseCategory.FOOD,
            description="  Lunch  ",
            date=date(2024, 12, 1),
        )
        assert draft.amount == Decimal("12.50")
        assert draft.description == "Lunch"

    def test_draft_defaults(self):
        """Test that currency, category and date have defaults."""
        draft = ExpenseDraft(amount=Decimal("5"), description="Bus")
        assert draft.currency == Currency.USD
        assert draft.category == ExpenseCategory.OTHER
        assert draft.date == date.today()

    def test_draft_rejects_non_positive_amount(self):
        """Test that zero and negative amounts are rejected."""
        with pytest.raises(ValidationError):
            ExpenseDraft(amount=Decimal("0"), description="Nothing")
        with pytest.raises(ValidationError):
            ExpenseDraft(amount=Decimal("-3"), description="Refund")

    def test_amount_upper_bound(self):
        """Amounts above MAX_AMOUNT are rejected by drafts and expenses."""
        assert ExpenseDraft(amount=MAX_AMOUNT, description="House").amount == MAX_AMOUNT
        with pytest.raises(ValidationError):
            ExpenseDraft(amount=MAX_AMOUNT + Decimal("0.01"), description="Too much")
        with pytest.raises(ValidationError):
            Expense(
                amount=Decimal("1" + "0" * 26),
                currency=Currency.USD,
                amount_in_base=Decimal("1" + "0" * 26),
                category=ExpenseCategory.OTHER,
                description="Too much",
                date=date(2024, 1, 5),
            )

    def test_long_description_accepted(self):
        """Descriptions have no length limit."""
        draft = ExpenseDraft(amount=Decimal("1"), description="x" * 1000)
        assert len(draft.description) == 1000

    def test_draft_rejects_blank_description(self):
        """Test that a whitespace-only description is rejected."""
        with pytest.raises(ValidationError):
            ExpenseDraft(amount=Decimal("3"), description="   ")

    def test_expense_is_frozen(self):
        """Expenses are immutable once created."""
        expense = Expense(
            amount=Decimal("10"),
            currency=Currency.USD,
            amount_in_base=Decimal("10"),
            category=ExpenseCategory.OTHER,
            description="Socks",
            date=date(2024, 1, 5),
        )
        with pytest.raises(ValidationError):
            expense.amount = Decimal("20")

    def test_storage_dict_uses_camel_case(self):
        """The persisted layout uses camelCase keys and JSON-safe values."""
        expense = Expense(
            id=uuid4(),
            amount=Decimal("46"),
            currency=Currency.EUR,
            amount_in_base=Decimal("50"),
            category=ExpenseCategory.TRAVEL,
            description="Train",
            date=date(2024, 2, 3),
            timestamp=datetime(2024, 2, 3, 10, 0, tzinfo=timezone.utc),
        )
        data = expense.to_storage_dict()
        assert set(data) == {
            "id", "amount", "currency", "amountInBase",
            "category", "description", "date", "timestamp",
        }
        assert data["amountInBase"] == "50"
        assert data["category"] == "Travel"
        assert data["date"] == "2024-02-03"

    def test_expense_loads_from_storage_dict(self):
        """Test that a persisted record validates back into an Expense."""
        record = {
            "id": str(uuid4()),
            "amount": 12.5,
            "currency": "NOK",
            "amountInBase": 1.17,
            "category": "Food & Drink",
            "description": "Kaffe",
            "date": "2024-03-01",
            "timestamp": "2024-03-01T08:30:00Z",
        }
        expense = Expense.model_validate(record)
        assert expense.currency == Currency.NOK
        assert expense.category == ExpenseCategory.FOOD
        assert expense.amount == Decimal("12.5")

    def test_summary_line(self):
        expense = Expense(
            amount=Decimal("3.20"),
            currency=Currency.EUR,
            amount_in_base=Decimal("3.48"),
            category=ExpenseCategory.FOOD,
            description="Coffee",
            date=date(2024, 5, 2),
        )
        assert expense.summary_line == "2024-05-02: Coffee (3.20 EUR) [Food & Drink]"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            description="Expense deleted",
        )
        assert event.severity == AuditSeverity.INFO
        assert event.details == {}

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        expense_id = uuid4()
        event = AuditEventBuilder.expense_added(
            expense_id=expense_id,
            amount="10 USD",
            category="Other",
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "expense_added"
        assert log_dict["entity_id"] == str(expense_id)
        assert log_dict["details"]["amount"] == "10 USD"

    def test_failure_events_carry_severity(self):
        """Test that failure builders set warning/error severity."""
        load_failed = AuditEventBuilder.store_load_failed("expenses", "bad json")
        advice_failed = AuditEventBuilder.advice_failed("timeout")
        assert load_failed.severity == AuditSeverity.WARNING
        assert load_failed.error_message == "bad json"
        assert advice_failed.severity == AuditSeverity.ERROR


class TestExpenseCategories:
    """Tests for expense category enum."""

    def test_all_categories_exist(self):
        """Test that the eight expected categories exist."""
        expected = [
            "Food & Drink", "Transport", "Shopping", "Entertainment",
            "Bills & Utilities", "Health", "Travel", "Other",
        ]
        assert [c.value for c in ExpenseCategory] == expected

    def test_category_values(self):
        assert ExpenseCategory.FOOD.value == "Food & Drink"
        assert ExpenseCategory.BILLS.value == "Bills & Utilities"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""
Currency Model

Fixed exchange rates and the conversion/formatting helpers every
displayed amount goes through.

DESIGN DECISION: Rates are static constants relative to USD.
All conversions pivot through USD, so the table only needs one
rate per currency and conversion is a pure, total function.
Amounts are Decimal end to end; floats never enter the arithmetic.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum
from typing import Union


class Currency(str, Enum):
    """Supported currencies."""
    USD = "USD"
    EUR = "EUR"
    INR = "INR"
    DKK = "DKK"
    NOK = "NOK"


# The reference (pivot) currency of the rate table
PIVOT_CURRENCY = Currency.USD

# Units of each currency per 1 USD
RATES: dict[Currency, Decimal] = {
    Currency.USD: Decimal("1"),
    Currency.EUR: Decimal("0.92"),
    Currency.INR: Decimal("83.5"),
    Currency.DKK: Decimal("6.85"),
    Currency.NOK: Decimal("10.65"),
}

# Display symbols. Currencies without a distinct symbol show their code.
SYMBOLS: dict[Currency, str] = {
    Currency.USD: "$",
    Currency.EUR: "€",
    Currency.INR: "₹",
    Currency.DKK: "DKK",
    Currency.NOK: "NOK",
}

CENTS = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_decimal(amount: Number) -> Decimal:
    """Coerce a numeric value to Decimal without binary float artifacts."""
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        return Decimal(str(amount))
    return Decimal(amount)


def convert(amount: Number, from_currency: Currency, to_currency: Currency) -> Decimal:
    """
    Convert an amount between two currencies via USD.

    Same-currency conversion returns the amount unchanged.
    """
    amount = to_decimal(amount)
    from_currency = Currency(from_currency)
    to_currency = Currency(to_currency)

    if from_currency == to_currency:
        return amount

    amount_in_pivot = amount / RATES[from_currency]
    return amount_in_pivot * RATES[to_currency]


def round_half_up(amount: Decimal, exponent: Decimal) -> Decimal:
    """Round half-up to the place of `exponent`, whatever the magnitude."""
    with localcontext() as ctx:
        needed = amount.adjusted() + 1 - exponent.as_tuple().exponent
        ctx.prec = max(ctx.prec, needed)
        return amount.quantize(exponent, rounding=ROUND_HALF_UP)


def symbol(currency: Currency) -> str:
    """The bare currency symbol, without an amount."""
    return SYMBOLS[Currency(currency)]


def format_amount(amount: Number, currency: Currency) -> str:
    """
    Render an amount with grouping, exactly two decimals and its symbol.

    Examples:
        format_amount(1234.5, Currency.USD) -> "$1,234.50"
        format_amount(80, Currency.DKK)     -> "DKK 80.00"
    """
    currency = Currency(currency)
    value = round_half_up(to_decimal(amount), CENTS)

    sign = "-" if value < 0 else ""
    digits = f"{abs(value):,.2f}"

    sym = SYMBOLS[currency]
    if sym == currency.value:
        # Code-style symbols are separated from the number
        return f"{sign}{sym} {digits}"
    return f"{sign}{sym}{digits}"

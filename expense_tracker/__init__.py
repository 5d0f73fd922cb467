"""
Expense Tracker - Source Package

A personal, single-device expense tracker: multi-currency expenses,
totals in a selectable base currency, category and monthly analytics,
and a Gemini-backed spending assistant.

DESIGN PRINCIPLES:
1. Every displayed total is reconverted from each expense's own currency
2. All state lives in one local store and one session context
3. External failures degrade to a fixed fallback, never a crash
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"

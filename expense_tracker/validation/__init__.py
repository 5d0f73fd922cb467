"""Form validation package."""

from expense_tracker.validation.draft import build_draft, parse_amount

__all__ = ["build_draft", "parse_amount"]

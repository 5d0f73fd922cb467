"""AI Agents package."""

from expense_tracker.agents.advisor import (
    EMPTY_RESPONSE_MESSAGE,
    FALLBACK_APOLOGY,
    FinancialAdvisor,
    build_advice_prompt,
)
from expense_tracker.agents.chat import ChatMessage, ChatRole, ChatSession

__all__ = [
    "EMPTY_RESPONSE_MESSAGE",
    "FALLBACK_APOLOGY",
    "FinancialAdvisor",
    "build_advice_prompt",
    "ChatMessage",
    "ChatRole",
    "ChatSession",
]

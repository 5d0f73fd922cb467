"""
Spending Advisor

Forwards the user's question, together with a line-by-line summary of
every expense, to Gemini and returns the text it answers with.

BOUNDARIES:
- The advisor only reads the expense list; it never mutates the store
- Exactly one request per question: no retries, no timeout
- Any failure (missing key, network, auth, quota, blocked response)
  becomes a fixed apology string; nothing is raised to the UI
"""

from typing import Any, Iterable, Optional

import google.generativeai as genai

from expense_tracker.audit import AuditLogger, get_audit_logger
from expense_tracker.config import GeminiSettings, get_settings
from expense_tracker.models.expense import Expense


FALLBACK_APOLOGY = (
    "Sorry, I'm having trouble connecting to the financial brain right now. "
    "Please try again later."
)
EMPTY_RESPONSE_MESSAGE = "I couldn't generate a response at this time."

SYSTEM_INSTRUCTION = (
    "You are a helpful financial assistant for a mobile expense tracker. "
    "Keep responses concise and easy to read on mobile."
)


def summarize_expenses(expenses: Iterable[Expense]) -> str:
    """One '- ' line per expense, in the order given."""
    return "\n".join(f"- {expense.summary_line}" for expense in expenses)


def build_advice_prompt(
    question: str,
    expenses: Iterable[Expense],
    base_currency: str,
) -> str:
    """Build the prompt sent to the model."""
    summary = summarize_expenses(expenses)
    base = getattr(base_currency, "value", base_currency)

    return f"""You are a smart personal finance assistant.
The user's base currency is {base}.

Here is the user's recent transaction history:
{summary}

User Question: "{question}"

Provide a helpful, concise, and friendly answer.
If the user asks for totals, calculate them accurately based on the provided list.
If the user asks for advice, provide actionable tips based on their spending habits visible in the list.
Format the response with clear paragraphs or bullet points."""


class FinancialAdvisor:
    """
    Gemini-backed spending advisor.

    The model is configured on first use so that the tracker works
    without a Gemini key; asking a question without one simply
    yields the apology.
    """

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        model: Optional[Any] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Args:
            settings: Gemini settings; loaded from the environment if omitted.
            model: Anything with an async generate_content_async(prompt).
                   Tests pass a fake here.
            audit_logger: Defaults to the shared audit logger.
        """
        self._settings = settings
        self._model = model
        self._audit_logger = audit_logger or get_audit_logger()

    def _configure_genai(self):
        """Configure Google Generative AI."""
        settings = self._settings or get_settings().gemini
        genai.configure(api_key=settings.api_key)
        return genai.GenerativeModel(
            model_name=settings.model_name,
            generation_config={
                "temperature": settings.temperature,
                "max_output_tokens": settings.max_tokens,
            },
            system_instruction=SYSTEM_INSTRUCTION,
        )

    async def get_advice(
        self,
        question: str,
        expenses: Iterable[Expense],
        base_currency: str,
    ) -> str:
        """
        Ask the model about the user's spending.

        Returns the model's text verbatim, or a fixed fallback message.
        """
        expenses = list(expenses)
        self._audit_logger.log_advice_requested(
            question_length=len(question),
            expense_count=len(expenses),
        )

        try:
            if self._model is None:
                self._model = self._configure_genai()

            prompt = build_advice_prompt(question, expenses, base_currency)
            response = await self._model.generate_content_async(prompt)
            text = response.text
        except Exception as e:
            self._audit_logger.log_advice_failed(f"{type(e).__name__}: {e}")
            return FALLBACK_APOLOGY

        return text or EMPTY_RESPONSE_MESSAGE

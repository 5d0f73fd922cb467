"""
Tests for the spending advisor and chat session.

The Gemini model is replaced by fakes; no network calls are made.
"""

import asyncio
import pytest
from datetime import date
from decimal import Decimal

from expense_tracker.agents import (
    EMPTY_RESPONSE_MESSAGE,
    FALLBACK_APOLOGY,
    ChatRole,
    ChatSession,
    FinancialAdvisor,
    build_advice_prompt,
)
from expense_tracker.config import get_settings
from expense_tracker.models.currency import Currency
from expense_tracker.models.expense import Expense, ExpenseCategory


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeModel:
    """Records prompts and answers with a fixed text."""

    def __init__(self, text="Spend less on coffee."):
        self.text = text
        self.prompts = []

    async def generate_content_async(self, prompt):
        self.prompts.append(prompt)
        return FakeResponse(self.text)


class FailingModel:
    """Simulates a transport failure."""

    async def generate_content_async(self, prompt):
        raise ConnectionError("network unreachable")


class BlockedModel:
    """Simulates a blocked response, where reading .text raises."""

    async def generate_content_async(self, prompt):
        class Blocked:
            @property
            def text(self):
                raise ValueError("response was blocked")
        return Blocked()


def make_expense(description="Coffee", amount="3.20", currency=Currency.EUR):
    return Expense(
        amount=Decimal(amount),
        currency=currency,
        amount_in_base=Decimal("3.48"),
        category=ExpenseCategory.FOOD,
        description=description,
        date=date(2024, 5, 2),
    )


class TestAdvicePrompt:
    """Tests for build_advice_prompt."""

    def test_contains_base_currency_question_and_expenses(self):
        prompt = build_advice_prompt(
            "Where can I save?",
            [make_expense("Coffee"), make_expense("Bagel", "2.00")],
            "EUR",
        )
        assert "The user's base currency is EUR." in prompt
        assert 'User Question: "Where can I save?"' in prompt
        assert "- 2024-05-02: Coffee (3.20 EUR) [Food & Drink]" in prompt
        assert "- 2024-05-02: Bagel (2.00 EUR) [Food & Drink]" in prompt

    def test_accepts_currency_enum(self):
        prompt = build_advice_prompt("Hi", [], Currency.NOK)
        assert "The user's base currency is NOK." in prompt

    def test_empty_history(self):
        """No expenses embed an empty summary under the history header."""
        prompt = build_advice_prompt("Hi", [], "USD")
        assert "Here is the user's recent transaction history:\n\n" in prompt
        assert not [line for line in prompt.splitlines() if line.startswith("- ")]
        assert 'User Question: "Hi"' in prompt


class TestFinancialAdvisor:
    """Tests for FinancialAdvisor.get_advice."""

    def test_returns_model_text_verbatim(self):
        model = FakeModel("  Cook at home more.\n- Tip 1  ")
        advisor = FinancialAdvisor(model=model)

        answer = asyncio.run(advisor.get_advice("Tips?", [make_expense()], "EUR"))

        assert answer == "  Cook at home more.\n- Tip 1  "
        assert len(model.prompts) == 1
        assert "Tips?" in model.prompts[0]

    def test_transport_failure_returns_fallback(self):
        advisor = FinancialAdvisor(model=FailingModel())
        answer = asyncio.run(advisor.get_advice("Tips?", [], "EUR"))
        assert answer == FALLBACK_APOLOGY

    def test_blocked_response_returns_fallback(self):
        advisor = FinancialAdvisor(model=BlockedModel())
        answer = asyncio.run(advisor.get_advice("Tips?", [], "EUR"))
        assert answer == FALLBACK_APOLOGY

    def test_empty_text_returns_placeholder(self):
        advisor = FinancialAdvisor(model=FakeModel(""))
        answer = asyncio.run(advisor.get_advice("Tips?", [], "EUR"))
        assert answer == EMPTY_RESPONSE_MESSAGE

    def test_missing_api_key_returns_fallback(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        get_settings.cache_clear()
        try:
            advisor = FinancialAdvisor()
            answer = asyncio.run(advisor.get_advice("Tips?", [], "EUR"))
        finally:
            get_settings.cache_clear()
        assert answer == FALLBACK_APOLOGY


class TestChatSession:
    """Tests for ChatSession."""

    def test_greeting_mentions_base_currency(self):
        chat = ChatSession(FinancialAdvisor(model=FakeModel()), Currency.DKK)
        assert len(chat.messages) == 1
        assert chat.messages[0].role == ChatRole.AI
        assert "DKK" in chat.messages[0].text

    def test_send_appends_question_and_answer(self):
        chat = ChatSession(FinancialAdvisor(model=FakeModel("Answer")), Currency.EUR)

        reply = asyncio.run(chat.send("How am I doing?", [make_expense()], Currency.EUR))

        assert reply.text == "Answer"
        assert [m.role for m in chat.messages] == [ChatRole.AI, ChatRole.USER, ChatRole.AI]
        assert chat.messages[1].text == "How am I doing?"
        assert chat.pending is False

    def test_blank_question_is_ignored(self):
        model = FakeModel()
        chat = ChatSession(FinancialAdvisor(model=model), Currency.EUR)

        assert asyncio.run(chat.send("   ", [], Currency.EUR)) is None
        assert len(chat.messages) == 1
        assert model.prompts == []

    def test_send_disabled_while_pending(self):
        """Only one advice request may be outstanding."""
        observed = {}

        class ProbeModel:
            async def generate_content_async(self, prompt):
                observed["pending"] = chat.pending
                observed["can_send"] = chat.can_send("another question")
                observed["second"] = await chat.send("another question", [], Currency.EUR)
                return FakeResponse("ok")

        chat = ChatSession(FinancialAdvisor(model=ProbeModel()), Currency.EUR)
        asyncio.run(chat.send("first", [], Currency.EUR))

        assert observed == {"pending": True, "can_send": False, "second": None}
        assert chat.pending is False
        assert [m.text for m in chat.messages[1:]] == ["first", "ok"]

    def test_failure_still_produces_a_reply(self):
        chat = ChatSession(FinancialAdvisor(model=FailingModel()), Currency.EUR)
        reply = asyncio.run(chat.send("Help", [], Currency.EUR))
        assert reply.text == FALLBACK_APOLOGY
        assert chat.pending is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

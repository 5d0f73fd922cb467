"""
Assistant Chat Session

Conversation state of the assistant screen: the message list and the
single outstanding request. While a request is pending, sending is
disabled, so there is never more than one advice call in flight.
"""

from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel

from expense_tracker.agents.advisor import FinancialAdvisor
from expense_tracker.models.currency import Currency
from expense_tracker.models.expense import Expense


class ChatRole(str, Enum):
    USER = "user"
    AI = "ai"


class ChatMessage(BaseModel):
    role: ChatRole
    text: str


def greeting(base_currency: Currency) -> str:
    return (
        f"Hello! I can help you analyze your spending in "
        f"{Currency(base_currency).value}. Ask me anything!"
    )


class ChatSession:
    """Messages exchanged with the advisor during one assistant visit."""

    def __init__(self, advisor: FinancialAdvisor, base_currency: Currency):
        self._advisor = advisor
        self._messages: list[ChatMessage] = [
            ChatMessage(role=ChatRole.AI, text=greeting(base_currency))
        ]
        self._pending = False

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def pending(self) -> bool:
        return self._pending

    def can_send(self, question: Optional[str]) -> bool:
        """Whether the send control is enabled for this input."""
        return not self._pending and bool(question and question.strip())

    async def send(
        self,
        question: str,
        expenses: Iterable[Expense],
        base_currency: Currency,
    ) -> Optional[ChatMessage]:
        """
        Post a question and wait for the answer.

        Returns the AI reply, or None if nothing was sent
        (blank question or a request already pending).
        """
        if not self.can_send(question):
            return None

        self._messages.append(ChatMessage(role=ChatRole.USER, text=question))
        self._pending = True
        try:
            answer = await self._advisor.get_advice(
                question,
                list(expenses),
                Currency(base_currency).value,
            )
        finally:
            self._pending = False

        reply = ChatMessage(role=ChatRole.AI, text=answer)
        self._messages.append(reply)
        return reply

"""
Main Orchestrator for Expense Tracker

Ties the components together into one application context that owns
all session state:
- the expense store (persisted)
- the selected base currency (session only, never persisted)
- the current screen
- the assistant chat session

DESIGN DECISION: No module holds ambient globals. The UI keeps exactly
one AppContext per session and passes it to every screen.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Union
from uuid import UUID

from expense_tracker.agents import ChatMessage, ChatSession, FinancialAdvisor
from expense_tracker.analytics import (
    DashboardSummary,
    MonthlyTotal,
    category_breakdown,
    recent_expenses,
    six_month_trend,
    summarize_dashboard,
)
from expense_tracker.audit import AuditLogger, configure_logging, get_audit_logger
from expense_tracker.config import Settings, get_settings
from expense_tracker.models.currency import Currency
from expense_tracker.models.expense import Expense, ExpenseCategory, ExpenseDraft
from expense_tracker.navigation import (
    NavigationEvent,
    NavigationEventKind,
    NavigationState,
    View,
)
from expense_tracker.services.storage import (
    ExpenseStore,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
)
from expense_tracker.validation import build_draft


class AppContext:
    """
    Session state of the expense tracker.

    Screens read from it (expenses, base_currency, view) and report
    user actions to it; it never renders anything itself.
    """

    def __init__(
        self,
        store: ExpenseStore,
        advisor: FinancialAdvisor,
        base_currency: Currency = Currency.EUR,
        recent_limit: int = 5,
        trend_months: int = 6,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self.store = store
        self.advisor = advisor
        self.navigation = NavigationState()
        self._base_currency = Currency(base_currency)
        self._recent_limit = recent_limit
        self._trend_months = trend_months
        self._audit_logger = audit_logger or get_audit_logger()
        self._chat: Optional[ChatSession] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def expenses(self) -> list[Expense]:
        return self.store.expenses

    @property
    def base_currency(self) -> Currency:
        return self._base_currency

    @property
    def view(self) -> View:
        return self.navigation.current

    @property
    def chat(self) -> ChatSession:
        """Chat session for the current assistant visit, greeting in the base currency."""
        if self._chat is None:
            self._chat = ChatSession(self.advisor, self._base_currency)
        return self._chat

    def set_base_currency(self, currency: Union[Currency, str]) -> None:
        currency = Currency(currency)
        if currency == self._base_currency:
            return
        self._audit_logger.log_base_currency_changed(
            old=self._base_currency.value,
            new=currency.value,
        )
        self._base_currency = currency

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def navigate(self, event: NavigationEvent) -> View:
        previous = self.navigation.current
        current = self.navigation.dispatch(event)
        if current == View.ASSISTANT and previous != View.ASSISTANT:
            # Every visit to the assistant starts a new conversation
            self._chat = None
        return current

    def select_view(self, view: Union[View, str]) -> View:
        return self.navigate(NavigationEvent.select(View(view)))

    # ------------------------------------------------------------------
    # Expense flows
    # ------------------------------------------------------------------

    def add_expense(self, draft: ExpenseDraft) -> Expense:
        """Save a draft and return to the dashboard."""
        expense = self.store.add(draft)
        self.navigate(NavigationEvent(kind=NavigationEventKind.EXPENSE_SAVED))
        return expense

    def submit_expense_form(
        self,
        amount: Union[str, float, Decimal, None],
        description: Optional[str],
        currency: Currency = Currency.USD,
        category: ExpenseCategory = ExpenseCategory.OTHER,
        expense_date: Optional[date] = None,
    ) -> Optional[Expense]:
        """
        Handle the add-expense form.

        Invalid input adds nothing and leaves the add screen open.
        """
        draft = build_draft(
            amount=amount,
            description=description,
            currency=currency,
            category=category,
            expense_date=expense_date,
        )
        if draft is None:
            return None
        return self.add_expense(draft)

    def cancel_add(self) -> View:
        return self.navigate(NavigationEvent(kind=NavigationEventKind.ADD_CANCELLED))

    def delete_expense(self, expense_id: Union[UUID, str]) -> bool:
        return self.store.delete(expense_id)

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def dashboard(self, today: Optional[date] = None) -> DashboardSummary:
        return summarize_dashboard(
            self.expenses,
            self._base_currency,
            today=today,
            recent_limit=self._recent_limit,
        )

    def category_breakdown(self) -> dict[ExpenseCategory, Decimal]:
        return category_breakdown(self.expenses, self._base_currency)

    def trend(self, today: Optional[date] = None) -> list[MonthlyTotal]:
        return six_month_trend(
            self.expenses,
            self._base_currency,
            today=today,
            months=self._trend_months,
        )

    def history(self) -> list[Expense]:
        return recent_expenses(self.expenses)

    # ------------------------------------------------------------------
    # Assistant
    # ------------------------------------------------------------------

    async def ask(self, question: str) -> Optional[ChatMessage]:
        """Send a question to the assistant with the current expenses."""
        return await self.chat.send(question, self.expenses, self._base_currency)


def create_app_context(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorage] = None,
    advisor: Optional[FinancialAdvisor] = None,
    persist: bool = True,
) -> AppContext:
    """
    Factory function to create the application context.

    Args:
        settings: Defaults to the cached environment settings.
        storage: Key-value backend; defaults to the configured JSON file.
        advisor: Defaults to a Gemini advisor configured on first use.
        persist: Set to False to keep expenses in memory only.

    Returns:
        An AppContext whose store is already loaded.
    """
    settings = settings or get_settings()
    app_settings = settings.app
    storage_settings = settings.storage

    configure_logging(debug=app_settings.debug_mode)
    audit_logger = get_audit_logger()

    if storage is None:
        if persist:
            storage = JsonFileStorage(storage_settings.path)
        else:
            storage = InMemoryStorage()

    store = ExpenseStore(
        storage,
        key=storage_settings.expenses_key,
        audit_logger=audit_logger,
    )
    store.load()

    return AppContext(
        store=store,
        advisor=advisor or FinancialAdvisor(audit_logger=audit_logger),
        base_currency=app_settings.default_base_currency,
        recent_limit=app_settings.recent_activity_limit,
        trend_months=app_settings.trend_months,
        audit_logger=audit_logger,
    )

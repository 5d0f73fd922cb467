"""
Expense Store

The ordered in-memory collection of expenses, mirrored to a single
named entry of local key-value storage.

GUARANTEES:
- Every mutation is followed by a synchronous write of the full list
- Loading never fails the caller: absent or malformed data is an empty store
- Ids are assigned here and never reused

Persistence is fire-and-forget: write failures are logged, not raised.
"""

import json
from datetime import datetime, timezone
from typing import Callable, Optional, Union
from uuid import UUID, uuid4

from pydantic import ValidationError

from expense_tracker.audit import AuditLogger, get_audit_logger
from expense_tracker.models.currency import PIVOT_CURRENCY, convert
from expense_tracker.models.expense import Expense, ExpenseDraft
from expense_tracker.services.storage.interface import KeyValueStorage, StorageError


DEFAULT_EXPENSES_KEY = "expenses"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExpenseStore:
    """
    Owns the expense collection.

    Usage:
        store = ExpenseStore(JsonFileStorage(path))
        store.load()
        expense = store.add(draft)
        store.delete(expense.id)
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = DEFAULT_EXPENSES_KEY,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Args:
            storage: Key-value backend the list is persisted to.
            key: Name of the storage entry holding the list.
            audit_logger: Defaults to the shared audit logger.
            clock: Source of creation timestamps (injectable for tests).
        """
        self._storage = storage
        self._key = key
        self._audit_logger = audit_logger or get_audit_logger()
        self._clock = clock
        self._expenses: list[Expense] = []

    @property
    def key(self) -> str:
        return self._key

    @property
    def expenses(self) -> list[Expense]:
        """Current expenses in insertion order (a copy)."""
        return list(self._expenses)

    def __len__(self) -> int:
        return len(self._expenses)

    def __iter__(self):
        return iter(list(self._expenses))

    def get(self, expense_id: Union[UUID, str]) -> Optional[Expense]:
        expense_id = self._coerce_id(expense_id)
        if expense_id is None:
            return None
        for expense in self._expenses:
            if expense.id == expense_id:
                return expense
        return None

    def load(self) -> list[Expense]:
        """
        Replace the in-memory collection with the persisted one.

        Absent data yields an empty store. So does anything unreadable:
        invalid JSON, a non-list document, or a record that fails validation.
        """
        try:
            raw = self._storage.get_item(self._key)
        except StorageError as e:
            self._audit_logger.log_store_load_failed(self._key, str(e))
            self._expenses = []
            return self.expenses

        if raw is None:
            self._expenses = []
            self._audit_logger.log_store_loaded(0, self._key)
            return self.expenses

        try:
            records = json.loads(raw)
            if not isinstance(records, list):
                raise ValueError("persisted expenses are not a list")
            expenses = [Expense.model_validate(record) for record in records]
        except (ValueError, TypeError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            self._audit_logger.log_store_load_failed(self._key, str(e))
            self._expenses = []
            return self.expenses

        self._expenses = expenses
        self._audit_logger.log_store_loaded(len(expenses), self._key)
        return self.expenses

    def add(self, draft: ExpenseDraft) -> Expense:
        """
        Create an expense from a draft, append it and persist.

        Assigns id, timestamp and the USD amount.
        """
        expense = Expense(
            id=self._new_id(),
            amount=draft.amount,
            currency=draft.currency,
            amount_in_base=convert(draft.amount, draft.currency, PIVOT_CURRENCY),
            category=draft.category,
            description=draft.description,
            date=draft.date,
            timestamp=self._clock(),
        )

        self._expenses.append(expense)
        self._persist()

        self._audit_logger.log_expense_added(
            expense_id=expense.id,
            amount=f"{expense.amount} {expense.currency.value}",
            category=expense.category.value,
        )
        return expense

    def delete(self, expense_id: Union[UUID, str]) -> bool:
        """
        Remove an expense by id and persist.

        Unknown ids are a no-op. Returns True if something was removed.
        """
        target = self._coerce_id(expense_id)
        remaining = [e for e in self._expenses if e.id != target]
        removed = len(remaining) != len(self._expenses)

        self._expenses = remaining
        self._persist()

        if removed:
            self._audit_logger.log_expense_deleted(target)
        return removed

    def _new_id(self) -> UUID:
        existing = {e.id for e in self._expenses}
        new_id = uuid4()
        while new_id in existing:
            new_id = uuid4()
        return new_id

    @staticmethod
    def _coerce_id(expense_id: Union[UUID, str]) -> Optional[UUID]:
        if isinstance(expense_id, UUID):
            return expense_id
        try:
            return UUID(str(expense_id))
        except ValueError:
            return None

    def _persist(self) -> None:
        payload = json.dumps(
            [expense.to_storage_dict() for expense in self._expenses],
            ensure_ascii=False,
        )
        try:
            self._storage.set_item(self._key, payload)
        except StorageError as e:
            self._audit_logger.log_store_save_failed(self._key, str(e))

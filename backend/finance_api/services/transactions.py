from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from finance_api.domain.entities import RecurrentPeriod, Transaction, TransactionType
from finance_api.domain.errors import not_found, validation_error
from finance_api.domain.filters import TransactionFilter
from finance_api.domain.money import DEFAULT_CURRENCY, Money
from finance_api.repositories.base import CategoryStore, TransactionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransactionView:
    """A transaction joined with its category's display name."""

    transaction: Transaction
    category_name: str


class TransactionService:
    def __init__(
        self,
        transactions: TransactionStore,
        categories: CategoryStore,
        default_currency: str = DEFAULT_CURRENCY,
    ):
        self.transactions = transactions
        self.categories = categories
        self.default_currency = default_currency

    def _ensure_category(self, category_id: uuid.UUID) -> None:
        category = self.categories.get_by_id(category_id)
        if not category or not category.is_active:
            raise validation_error("InvalidCategory", "Invalid categoryId", "categoryId")

    def _money(self, amount: Decimal, currency: str | None) -> Money:
        return Money.create(amount, currency or self.default_currency)

    def create(
        self,
        title: str,
        amount: Decimal,
        currency: str | None,
        date: date,
        type: TransactionType,
        category_id: uuid.UUID,
    ) -> uuid.UUID:
        self._ensure_category(category_id)

        tx = Transaction.create(title, self._money(amount, currency), date, type, category_id)
        tx.idempotency_hash = tx.generate_idempotency_hash()
        self.transactions.add(tx)

        logger.info("Created transaction %s (%s, %s)", tx.id, tx.type.name, tx.amount)
        return tx.id

    def create_recurrent(
        self,
        title: str,
        amount: Decimal,
        currency: str | None,
        date: date,
        end_date: date,
        type: TransactionType,
        category_id: uuid.UUID,
        period: RecurrentPeriod,
    ) -> uuid.UUID:
        if end_date <= date:
            raise validation_error(
                "InvalidEndDate",
                "End date must be greater than the transaction date.",
                "endDate",
            )
        self._ensure_category(category_id)

        tx = Transaction.create_recurrent(
            title,
            self._money(amount, currency),
            date,
            end_date,
            type,
            category_id,
            period,
        )
        tx.idempotency_hash = tx.generate_idempotency_hash()
        self.transactions.add(tx)

        logger.info(
            "Created recurrent transaction %s (%s until %s)",
            tx.id,
            tx.recurrence.period.name,
            tx.recurrence.end_date,
        )
        return tx.id

    def _views(self, rows: list[Transaction]) -> list[TransactionView]:
        names = self.categories.names_by_ids({tx.category_id for tx in rows})
        return [TransactionView(tx, names.get(tx.category_id, "")) for tx in rows]

    def get(self, transaction_id: uuid.UUID) -> TransactionView | None:
        tx = self.transactions.get_by_id(transaction_id)
        if tx is None:
            return None
        return self._views([tx])[0]

    def filter(self, criteria: TransactionFilter) -> list[TransactionView]:
        return self._views(self.transactions.filter(criteria))

    def update(
        self,
        transaction_id: uuid.UUID,
        amount: Decimal,
        currency: str | None,
        category_id: uuid.UUID,
    ) -> TransactionView:
        tx = self.transactions.get_by_id(transaction_id)
        if tx is None:
            raise not_found("Transaction", transaction_id)

        if category_id != tx.category_id:
            self._ensure_category(category_id)

        tx.update(self._money(amount, currency or tx.amount.currency), category_id)
        self.transactions.update(tx)

        logger.info("Updated transaction %s", tx.id)
        return self._views([tx])[0]

    def delete(self, transaction_id: uuid.UUID) -> bool:
        deleted = self.transactions.delete(transaction_id)
        if deleted:
            logger.info("Deleted transaction %s", transaction_id)
        return deleted

    def count(self) -> int:
        return self.transactions.count_all()

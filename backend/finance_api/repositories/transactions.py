from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from finance_api.domain.entities import Transaction
from finance_api.domain.filters import TransactionFilter
from finance_api.models.transaction import Transaction as TransactionRow
from finance_api.repositories.base import TransactionStore
from finance_api.repositories.mappers import transaction_to_domain, transaction_to_row, type_to_db


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_filters(criteria: TransactionFilter) -> list:
    filters = []

    term = criteria.title_term
    if term:
        like = f"%{_escape_like(term.casefold())}%"
        filters.append(TransactionRow.title_search.like(like, escape="\\"))

    period = criteria.date_period
    if period is not None:
        if period.end is not None:
            filters.append(TransactionRow.date >= period.start)
            filters.append(TransactionRow.date <= period.end)
        else:
            filters.append(TransactionRow.date == period.start)

    if criteria.type is not None:
        filters.append(TransactionRow.type == type_to_db(criteria.type))

    if criteria.category_ids:
        filters.append(TransactionRow.category_id.in_(sorted(criteria.category_ids)))

    return filters


class SqlAlchemyTransactionStore(TransactionStore):
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, transaction_id: uuid.UUID) -> Optional[Transaction]:
        row = self.db.get(TransactionRow, transaction_id)
        return transaction_to_domain(row) if row else None

    def add(self, transaction: Transaction) -> None:
        self.db.add(transaction_to_row(transaction))
        self.db.commit()

    def update(self, transaction: Transaction) -> None:
        row = self.db.get(TransactionRow, transaction.id)
        if row is None:
            raise LookupError(f"Transaction {transaction.id} does not exist")
        transaction_to_row(transaction, row)
        self.db.add(row)
        self.db.commit()

    def delete(self, transaction_id: uuid.UUID) -> bool:
        result = self.db.execute(delete(TransactionRow).where(TransactionRow.id == transaction_id))
        self.db.commit()
        return bool(result.rowcount)

    def filter(self, criteria: TransactionFilter) -> list[Transaction]:
        stmt = select(TransactionRow).where(*build_filters(criteria))
        rows = self.db.scalars(
            stmt.order_by(
                TransactionRow.date.desc(),
                TransactionRow.created_at.desc(),
                TransactionRow.id.asc(),
            )
        ).all()
        return [transaction_to_domain(r) for r in rows]

    def count_all(self) -> int:
        return int(self.db.scalar(select(func.count(TransactionRow.id))) or 0)

    def get_by_idempotency_hash(self, idempotency_hash: str) -> Optional[Transaction]:
        row = self.db.scalar(
            select(TransactionRow).where(TransactionRow.idempotency_hash == idempotency_hash).limit(1)
        )
        return transaction_to_domain(row) if row else None

"""Conversions between domain entities and SQLAlchemy rows."""

from __future__ import annotations

from finance_api.core.datetime_utils import to_utc_naive
from finance_api.domain import entities as domain
from finance_api.domain.money import Money
from finance_api.models.category import Category as CategoryRow
from finance_api.models.transaction import Transaction as TransactionRow
from finance_api.models.user import User as UserRow

_TYPE_TO_DB = {
    domain.TransactionType.INCOME: "income",
    domain.TransactionType.EXPENSE: "expense",
}
_TYPE_FROM_DB = {v: k for k, v in _TYPE_TO_DB.items()}

_PERIOD_TO_DB = {
    domain.RecurrentPeriod.DAILY: "daily",
    domain.RecurrentPeriod.WEEKLY: "weekly",
    domain.RecurrentPeriod.MONTHLY: "monthly",
    domain.RecurrentPeriod.YEARLY: "yearly",
}
_PERIOD_FROM_DB = {v: k for k, v in _PERIOD_TO_DB.items()}


def _naive(dt):
    return to_utc_naive(dt) if dt is not None else None


def type_to_db(value: domain.TransactionType) -> str:
    return _TYPE_TO_DB[domain.TransactionType(value)]


def category_to_domain(row: CategoryRow) -> domain.Category:
    return domain.Category(
        id=row.id,
        name=row.name,
        description=row.description,
        color=row.color,
        parent_category_id=row.parent_id,
        is_active=bool(row.is_active),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def category_to_row(category: domain.Category, row: CategoryRow | None = None) -> CategoryRow:
    row = row or CategoryRow(id=category.id)
    row.name = category.name
    row.description = category.description
    row.color = category.color
    row.parent_id = category.parent_category_id
    row.is_active = category.is_active
    row.created_at = _naive(category.created_at)
    row.updated_at = _naive(category.updated_at)
    return row


def transaction_to_domain(row: TransactionRow) -> domain.Transaction:
    recurrence = None
    if row.kind == domain.TransactionKind.RECURRENT.value:
        recurrence = domain.Recurrence(
            period=_PERIOD_FROM_DB[row.period],
            end_date=row.end_date,
        )

    return domain.Transaction(
        id=row.id,
        title=row.title,
        amount=Money.from_cents(row.amount_cents, row.currency),
        date=row.date,
        type=_TYPE_FROM_DB[row.type],
        category_id=row.category_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        idempotency_hash=row.idempotency_hash,
        recurrence=recurrence,
    )


def transaction_to_row(tx: domain.Transaction, row: TransactionRow | None = None) -> TransactionRow:
    row = row or TransactionRow(id=tx.id)
    row.kind = tx.kind.value
    row.title = tx.title
    row.title_search = tx.title.casefold()
    row.type = type_to_db(tx.type)
    row.amount_cents = tx.amount.cents
    row.currency = tx.amount.currency
    row.date = tx.date
    row.category_id = tx.category_id
    row.created_at = _naive(tx.created_at)
    row.updated_at = _naive(tx.updated_at)
    row.idempotency_hash = tx.idempotency_hash
    if tx.recurrence is not None:
        row.period = _PERIOD_TO_DB[tx.recurrence.period]
        row.end_date = tx.recurrence.end_date
    else:
        row.period = None
        row.end_date = None
    return row


def user_to_domain(row: UserRow) -> domain.User:
    return domain.User(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        nickname=row.nickname,
        role=domain.UserRole(row.role or UserRow.ROLE_USER),
        is_active=bool(row.is_active),
        created_at=row.created_at,
        last_login_at=row.last_login_at,
    )


def user_to_row(user: domain.User, row: UserRow | None = None) -> UserRow:
    row = row or UserRow(id=user.id)
    row.email = user.email
    row.password_hash = user.password_hash
    row.nickname = user.nickname
    row.role = user.role.value
    row.is_active = user.is_active
    row.created_at = _naive(user.created_at)
    row.last_login_at = _naive(user.last_login_at)
    return row

"""Per-month income/expense projection over persisted transactions.

For each of ``month_count`` consecutive calendar months starting at the
month of ``start_date`` the engine filters the transactions dated inside
that month and sums incomes and expenses:

    net_balance = sum(income) - sum(expense)

Totals are accumulated with ``Money.add`` so a month mixing currencies fails
with ``CurrencyMismatch``. Months without transactions report zero totals in
the currency of the closest earlier populated month (or, before the first
one, of the first populated month); a series without any transaction uses
the default currency.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import MAXYEAR, date
from decimal import Decimal

from finance_api.core.datetime_utils import add_months
from finance_api.domain.entities import Transaction, TransactionType
from finance_api.domain.errors import validation_error
from finance_api.domain.filters import TransactionFilter
from finance_api.domain.money import DEFAULT_CURRENCY, Money
from finance_api.domain.periods import DateOnlyPeriod
from finance_api.repositories.base import TransactionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthlyProjection:
    year: int
    month: int
    income_total: Money
    expense_total: Money

    @property
    def net_balance(self) -> Decimal:
        return self.income_total.amount - self.expense_total.amount

    @property
    def currency(self) -> str:
        return self.income_total.currency


class BalanceProjectionService:
    def __init__(self, transactions: TransactionStore, default_currency: str = DEFAULT_CURRENCY):
        self.transactions = transactions
        self.default_currency = default_currency

    def project(
        self,
        start_date: date,
        month_count: int,
        category_id: uuid.UUID | None = None,
    ) -> list[MonthlyProjection]:
        if month_count <= 0:
            raise validation_error(
                "InvalidMonthCount",
                "Month count must be greater than zero.",
                "monthCount",
            )

        first_month = start_date.replace(day=1)
        months_left = (MAXYEAR - first_month.year) * 12 + (12 - first_month.month) + 1
        if month_count > months_left:
            raise validation_error(
                "InvalidMonthCount",
                f"Month count cannot exceed {months_left} from {first_month:%m/%Y}.",
                "monthCount",
            )

        base = TransactionFilter(category_ids=frozenset({category_id}) if category_id else frozenset())

        months: list[tuple[date, list[Transaction]]] = []
        for i in range(month_count):
            month_start = add_months(first_month, i)
            period = DateOnlyPeriod.for_month(month_start.year, month_start.month)
            months.append((month_start, self.transactions.filter(base.for_period(period))))

        # Empty months borrow the currency of the series.
        currency = next(
            (rows[0].amount.currency for _, rows in months if rows),
            self.default_currency,
        )

        projections: list[MonthlyProjection] = []
        for month_start, rows in months:
            if rows:
                currency = rows[0].amount.currency
            income_total = Money.zero(currency)
            expense_total = Money.zero(currency)
            for tx in rows:
                if tx.type == TransactionType.INCOME:
                    income_total = income_total.add(tx.amount)
                elif tx.type == TransactionType.EXPENSE:
                    expense_total = expense_total.add(tx.amount)

            projections.append(
                MonthlyProjection(
                    year=month_start.year,
                    month=month_start.month,
                    income_total=income_total,
                    expense_total=expense_total,
                )
            )

        logger.info(
            "Projected %d month(s) from %s (category=%s)",
            month_count,
            first_month,
            category_id,
        )
        return projections

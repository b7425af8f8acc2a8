"""
Tests for BalanceProjectionService
"""
from datetime import date
from decimal import Decimal

import pytest

from finance_api.domain.entities import Transaction, TransactionType
from finance_api.domain.errors import DomainError, ErrorKind
from finance_api.domain.money import Money
from finance_api.services.projection import BalanceProjectionService


@pytest.fixture
def service(transaction_store):
    return BalanceProjectionService(transaction_store, default_currency="BRL")


@pytest.fixture
def add_tx(transaction_store):
    def _add(day, type, amount, category_id, currency="USD"):
        tx = Transaction.create("entry", Money.create(amount, currency), day, type, category_id)
        transaction_store.add(tx)
        return tx

    return _add


def test_three_month_projection(service, add_tx, make_category):
    category = make_category()
    add_tx(date(2024, 1, 15), TransactionType.INCOME, 100, category.id)
    add_tx(date(2024, 2, 10), TransactionType.EXPENSE, 40, category.id)

    rows = service.project(date(2024, 1, 1), 3)

    assert [(r.year, r.month, r.net_balance) for r in rows] == [
        (2024, 1, Decimal("100")),
        (2024, 2, Decimal("-40")),
        (2024, 3, Decimal("0")),
    ]
    assert rows[0].income_total == Money.create(100, "USD")
    assert rows[1].expense_total == Money.create(40, "USD")


def test_empty_month_uses_default_currency(service):
    rows = service.project(date(2024, 1, 1), 1)

    assert rows[0].currency == "BRL"
    assert rows[0].income_total == Money.zero("BRL")
    assert rows[0].expense_total == Money.zero("BRL")


def test_start_mid_month_covers_whole_month(service, add_tx, make_category):
    category = make_category()
    add_tx(date(2024, 1, 2), TransactionType.INCOME, 10, category.id)

    rows = service.project(date(2024, 1, 20), 1)

    assert rows[0].net_balance == Decimal("10")


def test_months_roll_over_the_year(service):
    rows = service.project(date(2024, 11, 5), 4)

    assert [(r.year, r.month) for r in rows] == [(2024, 11), (2024, 12), (2025, 1), (2025, 2)]


def test_category_scope(service, add_tx, make_category):
    food = make_category("Food")
    rent = make_category("Rent")
    add_tx(date(2024, 1, 3), TransactionType.EXPENSE, 30, food.id)
    add_tx(date(2024, 1, 4), TransactionType.EXPENSE, 900, rent.id)

    rows = service.project(date(2024, 1, 1), 1, category_id=food.id)

    assert rows[0].expense_total == Money.create(30, "USD")


def test_mixed_currencies_in_one_month(service, add_tx, make_category):
    category = make_category()
    add_tx(date(2024, 1, 3), TransactionType.INCOME, 10, category.id, currency="USD")
    add_tx(date(2024, 1, 4), TransactionType.INCOME, 10, category.id, currency="EUR")

    with pytest.raises(DomainError) as exc:
        service.project(date(2024, 1, 1), 1)

    assert exc.value.code == "CurrencyMismatch"


@pytest.mark.parametrize("month_count", [0, -1])
def test_invalid_month_count(service, month_count):
    with pytest.raises(DomainError) as exc:
        service.project(date(2024, 1, 1), month_count)

    assert exc.value.kind is ErrorKind.VALIDATION
    assert exc.value.code == "InvalidMonthCount"


def test_last_representable_month(service):
    rows = service.project(date(9999, 12, 1), 1)

    assert [(r.year, r.month) for r in rows] == [(9999, 12)]


def test_month_count_past_last_representable_month(service):
    with pytest.raises(DomainError) as exc:
        service.project(date(9999, 12, 1), 2)

    assert exc.value.kind is ErrorKind.VALIDATION
    assert exc.value.code == "InvalidMonthCount"


def test_empty_months_follow_series_currency(service, add_tx, make_category):
    category = make_category()
    add_tx(date(2024, 2, 10), TransactionType.INCOME, 100, category.id, currency="USD")
    add_tx(date(2024, 4, 10), TransactionType.INCOME, 100, category.id, currency="EUR")

    rows = service.project(date(2024, 1, 1), 5)

    assert [r.currency for r in rows] == ["USD", "USD", "USD", "EUR", "EUR"]

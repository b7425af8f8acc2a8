"""
Tests for TransactionStore.filter against SQLite
"""
import uuid
from datetime import date, datetime

import pytest

from finance_api.domain.entities import Transaction, TransactionType
from finance_api.domain.filters import TransactionFilter
from finance_api.domain.money import Money
from finance_api.domain.periods import DateOnlyPeriod


@pytest.fixture
def categories(make_category):
    return make_category("Salary"), make_category("Food")


@pytest.fixture
def add_tx(transaction_store):
    def _add(title, day, type=TransactionType.EXPENSE, category_id=None, amount="10", created_at=None):
        tx = Transaction.create(title, Money.create(amount), day, type, category_id)
        if created_at is not None:
            tx.created_at = created_at
        transaction_store.add(tx)
        return tx

    return _add


@pytest.fixture
def dataset(add_tx, categories):
    salary, food = categories
    return {
        "salary": add_tx("January salary", date(2024, 1, 5), TransactionType.INCOME, salary.id, "3000"),
        "market": add_tx("Supermarket", date(2024, 1, 10), TransactionType.EXPENSE, food.id, "250"),
        "bakery": add_tx("Bakery 100%_fresh", date(2024, 1, 10), TransactionType.EXPENSE, food.id, "12"),
        "feb": add_tx("Market run", date(2024, 2, 3), TransactionType.EXPENSE, food.id, "80"),
    }


def _titles(rows):
    return [r.title for r in rows]


class TestFilter:
    def test_empty_filter_returns_all_ordered_by_date_desc(self, transaction_store, dataset):
        rows = transaction_store.filter(TransactionFilter())

        assert len(rows) == 4
        dates = [r.date for r in rows]
        assert dates == sorted(dates, reverse=True)
        assert rows[0].title == "Market run"

    def test_title_is_case_insensitive_substring(self, transaction_store, dataset):
        rows = transaction_store.filter(TransactionFilter(title="MARKET"))

        assert sorted(_titles(rows)) == ["Market run", "Supermarket"]

    def test_blank_title_matches_everything(self, transaction_store, dataset):
        assert len(transaction_store.filter(TransactionFilter(title="  "))) == 4

    def test_like_wildcards_are_literal(self, transaction_store, dataset):
        assert _titles(transaction_store.filter(TransactionFilter(title="100%_"))) == ["Bakery 100%_fresh"]
        assert _titles(transaction_store.filter(TransactionFilter(title="%"))) == ["Bakery 100%_fresh"]

    def test_date_period_with_end_is_inclusive(self, transaction_store, dataset):
        period = DateOnlyPeriod.create(date(2024, 1, 5), date(2024, 1, 10))

        rows = transaction_store.filter(TransactionFilter(date_period=period))

        assert sorted(_titles(rows)) == ["Bakery 100%_fresh", "January salary", "Supermarket"]

    def test_date_period_without_end_is_exact_day(self, transaction_store, dataset):
        rows = transaction_store.filter(TransactionFilter(date_period=DateOnlyPeriod.create(date(2024, 1, 10))))

        assert sorted(_titles(rows)) == ["Bakery 100%_fresh", "Supermarket"]

    def test_type(self, transaction_store, dataset):
        rows = transaction_store.filter(TransactionFilter(type=TransactionType.INCOME))

        assert _titles(rows) == ["January salary"]

    def test_category_membership(self, transaction_store, dataset, categories):
        salary, food = categories

        assert len(transaction_store.filter(TransactionFilter(category_ids=frozenset({food.id})))) == 3
        assert len(transaction_store.filter(TransactionFilter(category_ids=frozenset({salary.id, food.id})))) == 4
        assert transaction_store.filter(TransactionFilter(category_ids=frozenset({uuid.uuid4()}))) == []

    def test_criteria_are_combined_with_and(self, transaction_store, dataset, categories):
        _, food = categories
        criteria = TransactionFilter(
            title="market",
            date_period=DateOnlyPeriod.for_month(2024, 1),
            type=TransactionType.EXPENSE,
            category_ids=frozenset({food.id}),
        )

        assert _titles(transaction_store.filter(criteria)) == ["Supermarket"]

    def test_same_date_ties_break_on_created_at_desc(self, transaction_store, add_tx, categories):
        _, food = categories
        day = date(2024, 3, 1)
        add_tx("older", day, category_id=food.id, created_at=datetime(2024, 3, 1, 8, 0))
        add_tx("newer", day, category_id=food.id, created_at=datetime(2024, 3, 1, 9, 0))

        rows = transaction_store.filter(TransactionFilter(date_period=DateOnlyPeriod.create(day)))

        assert _titles(rows) == ["newer", "older"]

    def test_round_trip_preserves_amount_and_recurrence(self, transaction_store, dataset):
        stored = transaction_store.get_by_id(dataset["market"].id)

        assert stored.amount == Money.create("250", "BRL")
        assert stored.recurrence is None

    def test_title_match_folds_non_ascii_case(self, transaction_store, add_tx, categories):
        _, food = categories
        add_tx("AÇÃO PETR4", date(2024, 4, 1), category_id=food.id)
        add_tx("Straße cafe", date(2024, 4, 2), category_id=food.id)

        assert _titles(transaction_store.filter(TransactionFilter(title="ação"))) == ["AÇÃO PETR4"]
        assert _titles(transaction_store.filter(TransactionFilter(title="STRASSE"))) == ["Straße cafe"]

    def test_largest_amount_round_trips(self, transaction_store, add_tx, categories):
        _, food = categories
        tx = add_tx("Big", date(2024, 4, 3), category_id=food.id, amount="9999999999999999.99")

        assert transaction_store.get_by_id(tx.id).amount.amount == tx.amount.amount

"""
Tests for CategoryService
"""
import uuid
from datetime import date

import pytest

from finance_api.domain.entities import Transaction, TransactionType
from finance_api.domain.errors import DomainError, ErrorKind
from finance_api.domain.money import Money
from finance_api.services.categories import CategoryService


@pytest.fixture
def service(category_store):
    return CategoryService(category_store)


def test_create_child_requires_existing_active_parent(service):
    with pytest.raises(DomainError) as exc:
        service.create("Child", parent_category_id=uuid.uuid4())
    assert exc.value.code == "InvalidParent"

    parent = service.create("Parent")
    service.set_active(parent.id, False)
    with pytest.raises(DomainError) as exc:
        service.create("Child", parent_category_id=parent.id)
    assert exc.value.code == "InvalidParent"


def test_tree_sorted_by_name(service):
    expenses = service.create("Expenses")
    service.create("Income")
    service.create("Rent", parent_category_id=expenses.id)
    service.create("Food", parent_category_id=expenses.id)

    roots = service.tree()

    assert [n.category.name for n in roots] == ["Expenses", "Income"]
    assert [n.category.name for n in roots[0].children] == ["Food", "Rent"]
    assert not roots[0].is_leaf
    assert roots[1].is_leaf


def test_tree_active_only(service):
    service.create("Kept")
    hidden = service.create("Hidden")
    service.set_active(hidden.id, False)

    assert [n.category.name for n in service.tree(active_only=True)] == ["Kept"]
    assert len(service.tree()) == 2


def test_rename(service):
    category = service.create("Food")

    renamed = service.rename(category.id, "Groceries", "Weekly", "#00FF00")

    assert service.get(category.id).name == "Groceries"
    assert renamed.color == "#00FF00"


def test_missing_category_is_not_found(service):
    with pytest.raises(DomainError) as exc:
        service.set_active(uuid.uuid4(), True)

    assert exc.value.kind is ErrorKind.NOT_FOUND


def test_delete_blocked_by_children(service):
    parent = service.create("Parent")
    service.create("Child", parent_category_id=parent.id)

    with pytest.raises(DomainError) as exc:
        service.delete(parent.id)

    assert exc.value.kind is ErrorKind.CONFLICT
    assert exc.value.code == "CategoryInUse"


def test_delete_blocked_by_transactions(service, transaction_store):
    category = service.create("Food")
    transaction_store.add(
        Transaction.create("Lunch", Money.create(20), date(2024, 1, 1), TransactionType.EXPENSE, category.id)
    )

    with pytest.raises(DomainError) as exc:
        service.delete(category.id)

    assert exc.value.code == "CategoryInUse"


def test_delete(service):
    category = service.create("Food")

    service.delete(category.id)

    assert service.get(category.id) is None

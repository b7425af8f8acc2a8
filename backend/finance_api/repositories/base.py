"""Abstract persistence contracts the services depend on."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from finance_api.domain.entities import Category, Transaction, User
from finance_api.domain.filters import TransactionFilter


class TransactionStore(ABC):
    @abstractmethod
    def get_by_id(self, transaction_id: uuid.UUID) -> Optional[Transaction]:
        """Get a transaction by ID."""

    @abstractmethod
    def add(self, transaction: Transaction) -> None:
        """Persist a new transaction."""

    @abstractmethod
    def update(self, transaction: Transaction) -> None:
        """Persist changes to an existing transaction."""

    @abstractmethod
    def delete(self, transaction_id: uuid.UUID) -> bool:
        """Delete a transaction. Returns False when it did not exist."""

    @abstractmethod
    def filter(self, criteria: TransactionFilter) -> list[Transaction]:
        """List transactions matching every present criterion, newest first."""

    @abstractmethod
    def count_all(self) -> int:
        """Count all transactions."""

    @abstractmethod
    def get_by_idempotency_hash(self, idempotency_hash: str) -> Optional[Transaction]:
        """Find a transaction by its import fingerprint."""


class UserStore(ABC):
    @abstractmethod
    def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """Get a user by ID."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by e-mail (case-insensitive)."""

    @abstractmethod
    def email_exists(self, email: str) -> bool:
        """Check whether an e-mail is already registered."""

    @abstractmethod
    def add(self, user: User) -> None:
        """Persist a new user. Raises a CONFLICT DomainError on duplicate e-mail."""

    @abstractmethod
    def update(self, user: User) -> None:
        """Persist changes to an existing user."""


class CategoryStore(ABC):
    @abstractmethod
    def get_by_id(self, category_id: uuid.UUID) -> Optional[Category]:
        """Get a category by ID."""

    @abstractmethod
    def list_all(self) -> list[Category]:
        """List every category."""

    @abstractmethod
    def names_by_ids(self, category_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, str]:
        """Map category IDs to names, skipping unknown IDs."""

    @abstractmethod
    def add(self, category: Category) -> None:
        """Persist a new category."""

    @abstractmethod
    def update(self, category: Category) -> None:
        """Persist changes to an existing category."""

    @abstractmethod
    def has_children(self, category_id: uuid.UUID) -> bool:
        """Check whether any category has this one as parent."""

    @abstractmethod
    def has_transactions(self, category_id: uuid.UUID) -> bool:
        """Check whether any transaction references this category."""

    @abstractmethod
    def delete(self, category_id: uuid.UUID) -> bool:
        """Delete a category. Returns False when it did not exist."""

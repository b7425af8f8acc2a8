from __future__ import annotations

import uuid
from typing import Iterable, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from finance_api.domain.entities import Category
from finance_api.models.category import Category as CategoryRow
from finance_api.models.transaction import Transaction as TransactionRow
from finance_api.repositories.base import CategoryStore
from finance_api.repositories.mappers import category_to_domain, category_to_row


class SqlAlchemyCategoryStore(CategoryStore):
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, category_id: uuid.UUID) -> Optional[Category]:
        row = self.db.get(CategoryRow, category_id)
        return category_to_domain(row) if row else None

    def list_all(self) -> list[Category]:
        rows = self.db.scalars(select(CategoryRow).order_by(CategoryRow.name.asc(), CategoryRow.id.asc())).all()
        return [category_to_domain(r) for r in rows]

    def names_by_ids(self, category_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, str]:
        ids = sorted(set(category_ids))
        if not ids:
            return {}
        pairs = self.db.execute(select(CategoryRow.id, CategoryRow.name).where(CategoryRow.id.in_(ids))).all()
        return {category_id: str(name) for category_id, name in pairs}

    def add(self, category: Category) -> None:
        self.db.add(category_to_row(category))
        self.db.commit()

    def update(self, category: Category) -> None:
        row = self.db.get(CategoryRow, category.id)
        if row is None:
            raise LookupError(f"Category {category.id} does not exist")
        category_to_row(category, row)
        self.db.add(row)
        self.db.commit()

    def has_children(self, category_id: uuid.UUID) -> bool:
        return (
            self.db.scalar(select(CategoryRow.id).where(CategoryRow.parent_id == category_id).limit(1))
            is not None
        )

    def has_transactions(self, category_id: uuid.UUID) -> bool:
        return (
            self.db.scalar(
                select(TransactionRow.id).where(TransactionRow.category_id == category_id).limit(1)
            )
            is not None
        )

    def delete(self, category_id: uuid.UUID) -> bool:
        result = self.db.execute(delete(CategoryRow).where(CategoryRow.id == category_id))
        self.db.commit()
        return bool(result.rowcount)

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from finance_api.domain.entities import User, normalize_email
from finance_api.domain.errors import conflict
from finance_api.models.user import User as UserRow
from finance_api.repositories.base import UserStore
from finance_api.repositories.mappers import user_to_domain, user_to_row


class SqlAlchemyUserStore(UserStore):
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        row = self.db.get(UserRow, user_id)
        return user_to_domain(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        row = self.db.scalar(select(UserRow).where(UserRow.email == normalize_email(email)))
        return user_to_domain(row) if row else None

    def email_exists(self, email: str) -> bool:
        return (
            self.db.scalar(
                select(UserRow.id).where(UserRow.email == normalize_email(email)).limit(1)
            )
            is not None
        )

    def add(self, user: User) -> None:
        self.db.add(user_to_row(user))
        try:
            self.db.commit()
        except IntegrityError:
            # Concurrent registration with the same e-mail lost the race.
            self.db.rollback()
            raise conflict("EmailTaken", f"Email '{user.email}' is already registered")

    def update(self, user: User) -> None:
        row = self.db.get(UserRow, user.id)
        if row is None:
            raise LookupError(f"User {user.id} does not exist")
        user_to_row(user, row)
        self.db.add(row)
        self.db.commit()

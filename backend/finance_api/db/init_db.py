from __future__ import annotations

import logging

from sqlalchemy import inspect, select
from sqlalchemy.orm import Session

from finance_api.core.config import settings
from finance_api.core.security import password_hasher
from finance_api.domain.entities import Category, User, UserRole
from finance_api.models.base import Base
from finance_api.models.category import Category as CategoryRow
from finance_api.models.user import User as UserRow
from finance_api.repositories.categories import SqlAlchemyCategoryStore
from finance_api.repositories.users import SqlAlchemyUserStore

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("Income", "Salary, refunds and other earnings", "#2E7D32"),
    ("Expenses", "Day-to-day spending", "#C62828"),
]


def ensure_schema(db: Session) -> None:
    engine = db.get_bind()
    if settings.auto_create_schema:
        Base.metadata.create_all(engine)
        return

    # Fail fast if database schema is behind code.
    inspector = inspect(engine)
    if inspector.has_table("transactions"):
        cols = {c.get("name") for c in inspector.get_columns("transactions")}
        if not {"idempotency_hash", "kind", "title_search"} <= cols:
            raise RuntimeError(
                "Database schema is outdated (missing columns on transactions). "
                "Run: alembic upgrade head"
            )


def ensure_seed_data(db: Session) -> None:
    ensure_schema(db)

    inspector = inspect(db.get_bind())
    # If migrations haven't been applied yet, don't fail startup.
    if not inspector.has_table("users") or not inspector.has_table("categories"):
        logger.warning("Schema not found; skipping seed data. Run: alembic upgrade head")
        return

    if settings.admin_email and settings.admin_password:
        users = SqlAlchemyUserStore(db)
        if db.scalar(select(UserRow.id).limit(1)) is None:
            admin = User.create(
                settings.admin_email,
                password_hasher.hash(settings.admin_password),
                settings.admin_nickname,
            )
            admin.role = UserRole.ADMIN
            users.add(admin)
            logger.info("Created bootstrap admin %s", admin.email)

    if not settings.seed_default_categories:
        return

    if db.scalar(select(CategoryRow.id).limit(1)) is not None:
        return

    categories = SqlAlchemyCategoryStore(db)
    for name, description, color in DEFAULT_CATEGORIES:
        categories.add(Category.create(name, description, color))
    logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))

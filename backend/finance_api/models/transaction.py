from __future__ import annotations

import datetime
import uuid

from sqlalchemy import BigInteger, Date, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from finance_api.models.base import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)

    # 'simple' | 'recurrent'
    kind: Mapped[str] = mapped_column(String(10), default="simple", index=True)

    title: Mapped[str] = mapped_column(String(256))
    # casefold() of title; searched instead of lower(title), which SQLite only folds for ASCII.
    # casefold() can grow a string ("Straße" -> "strasse"), hence the wider column.
    title_search: Mapped[str] = mapped_column(String(512))

    # 'income' | 'expense'
    type: Mapped[str] = mapped_column(String(10), index=True)

    amount_cents: Mapped[int] = mapped_column(BigInteger)
    currency: Mapped[str] = mapped_column(String(3))

    date: Mapped[datetime.date] = mapped_column(Date, index=True)

    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        index=True,
    )

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=False), nullable=False, index=True)
    updated_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)

    idempotency_hash: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)

    # Recurrent only
    # 'daily' | 'weekly' | 'monthly' | 'yearly'
    period: Mapped[str | None] = mapped_column(String(10), nullable=True, index=True)
    end_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)

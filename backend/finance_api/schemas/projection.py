from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


class BalanceProjectionIn(BaseModel):
    categoryId: uuid.UUID | None = None
    # Defaults to today (UTC) when omitted.
    startDate: date | None = None
    monthCount: int = Field(default=12, le=120)


class MonthlyProjectionOut(BaseModel):
    year: int
    month: int
    incomeTotal: Decimal
    expenseTotal: Decimal
    netBalance: Decimal
    currency: str


class BalanceProjectionOut(BaseModel):
    categoryId: uuid.UUID | None
    projections: list[MonthlyProjectionOut]

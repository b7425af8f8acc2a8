from __future__ import annotations

import datetime
import uuid
from decimal import Decimal

from pydantic import BaseModel, Field

from finance_api.domain.money import MAX_AMOUNT

CURRENCY_PATTERN = r"^[A-Za-z]{3}$"


class TransactionCreate(BaseModel):
    title: str = Field(min_length=1, max_length=256)
    amount: Decimal = Field(gt=0, le=MAX_AMOUNT)
    currency: str = Field(default="BRL", pattern=CURRENCY_PATTERN)
    date: datetime.date
    # 1 = income, 2 = expense
    type: int = Field(ge=1, le=2)
    categoryId: uuid.UUID


class RecurrentTransactionCreate(TransactionCreate):
    # 1 = daily, 2 = weekly, 3 = monthly, 4 = yearly
    period: int = Field(ge=1, le=4)
    endDate: datetime.date


class TransactionUpdate(BaseModel):
    amount: Decimal = Field(gt=0, le=MAX_AMOUNT)
    currency: str | None = Field(default=None, pattern=CURRENCY_PATTERN)
    categoryId: uuid.UUID


class IdOut(BaseModel):
    id: uuid.UUID


class CountOut(BaseModel):
    count: int


class TransactionOut(BaseModel):
    id: uuid.UUID
    title: str
    amount: Decimal
    currency: str
    date: datetime.date
    type: int
    categoryId: uuid.UUID
    categoryName: str
    isRecurrent: bool
    period: int | None = None
    endDate: datetime.date | None = None


class DatePeriodIn(BaseModel):
    start: datetime.date
    end: datetime.date | None = None


class TransactionFilterIn(BaseModel):
    title: str | None = None
    datePeriod: DatePeriodIn | None = None
    type: int | None = Field(default=None, ge=1, le=2)
    categoryIds: list[uuid.UUID] | None = None


class TransactionListOut(BaseModel):
    items: list[TransactionOut]
    total: int

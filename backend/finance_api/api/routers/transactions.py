from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException

from finance_api.api.deps import get_current_user, get_projection_service, get_transaction_service
from finance_api.core.datetime_utils import utc_today
from finance_api.domain.entities import RecurrentPeriod, TransactionType, User
from finance_api.domain.filters import TransactionFilter
from finance_api.domain.periods import DateOnlyPeriod
from finance_api.schemas.projection import BalanceProjectionIn, BalanceProjectionOut, MonthlyProjectionOut
from finance_api.schemas.transaction import (
    CountOut,
    IdOut,
    RecurrentTransactionCreate,
    TransactionCreate,
    TransactionFilterIn,
    TransactionListOut,
    TransactionOut,
    TransactionUpdate,
)
from finance_api.services.projection import BalanceProjectionService
from finance_api.services.transactions import TransactionService, TransactionView

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _to_out(view: TransactionView) -> TransactionOut:
    tx = view.transaction
    recurrence = tx.recurrence
    return TransactionOut(
        id=tx.id,
        title=tx.title,
        amount=tx.amount.amount,
        currency=tx.amount.currency,
        date=tx.date,
        type=int(tx.type),
        categoryId=tx.category_id,
        categoryName=view.category_name,
        isRecurrent=tx.is_recurrent,
        period=int(recurrence.period) if recurrence else None,
        endDate=recurrence.end_date if recurrence else None,
    )


@router.post("", response_model=IdOut, status_code=201)
def create_transaction(
    payload: TransactionCreate,
    service: TransactionService = Depends(get_transaction_service),
    current_user: User = Depends(get_current_user),
) -> IdOut:
    tx_id = service.create(
        title=payload.title,
        amount=payload.amount,
        currency=payload.currency,
        date=payload.date,
        type=TransactionType(payload.type),
        category_id=payload.categoryId,
    )
    return IdOut(id=tx_id)


@router.post("/recurrent", response_model=IdOut, status_code=201)
def create_recurrent_transaction(
    payload: RecurrentTransactionCreate,
    service: TransactionService = Depends(get_transaction_service),
    current_user: User = Depends(get_current_user),
) -> IdOut:
    tx_id = service.create_recurrent(
        title=payload.title,
        amount=payload.amount,
        currency=payload.currency,
        date=payload.date,
        end_date=payload.endDate,
        type=TransactionType(payload.type),
        category_id=payload.categoryId,
        period=RecurrentPeriod(payload.period),
    )
    return IdOut(id=tx_id)


@router.get("/count", response_model=CountOut)
def count_transactions(
    service: TransactionService = Depends(get_transaction_service),
    current_user: User = Depends(get_current_user),
) -> CountOut:
    return CountOut(count=service.count())


@router.post("/filter", response_model=TransactionListOut)
def filter_transactions(
    payload: TransactionFilterIn,
    service: TransactionService = Depends(get_transaction_service),
    current_user: User = Depends(get_current_user),
) -> TransactionListOut:
    period = None
    if payload.datePeriod is not None:
        period = DateOnlyPeriod.create(payload.datePeriod.start, payload.datePeriod.end)

    criteria = TransactionFilter(
        title=payload.title,
        date_period=period,
        type=TransactionType(payload.type) if payload.type is not None else None,
        category_ids=frozenset(payload.categoryIds or ()),
    )
    items = [_to_out(v) for v in service.filter(criteria)]
    return TransactionListOut(items=items, total=len(items))


@router.post("/balance-projection", response_model=BalanceProjectionOut)
def balance_projection(
    payload: BalanceProjectionIn,
    service: BalanceProjectionService = Depends(get_projection_service),
    current_user: User = Depends(get_current_user),
) -> BalanceProjectionOut:
    start_date = payload.startDate or utc_today()
    rows = service.project(start_date, payload.monthCount, payload.categoryId)

    return BalanceProjectionOut(
        categoryId=payload.categoryId,
        projections=[
            MonthlyProjectionOut(
                year=p.year,
                month=p.month,
                incomeTotal=p.income_total.amount,
                expenseTotal=p.expense_total.amount,
                netBalance=p.net_balance,
                currency=p.currency,
            )
            for p in rows
        ],
    )


@router.get("/{tx_id}", response_model=TransactionOut)
def get_transaction(
    tx_id: uuid.UUID,
    service: TransactionService = Depends(get_transaction_service),
    current_user: User = Depends(get_current_user),
) -> TransactionOut:
    view = service.get(tx_id)
    if view is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return _to_out(view)


@router.patch("/{tx_id}", response_model=TransactionOut)
def update_transaction(
    tx_id: uuid.UUID,
    payload: TransactionUpdate,
    service: TransactionService = Depends(get_transaction_service),
    current_user: User = Depends(get_current_user),
) -> TransactionOut:
    view = service.update(tx_id, payload.amount, payload.currency, payload.categoryId)
    return _to_out(view)


@router.delete("/{tx_id}")
def delete_transaction(
    tx_id: uuid.UUID,
    service: TransactionService = Depends(get_transaction_service),
    current_user: User = Depends(get_current_user),
) -> dict:
    if not service.delete(tx_id):
        raise HTTPException(status_code=404, detail="Transaction not found")
    return {"ok": True}

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session
from app.models.transaction import Transaction, TransactionType
from app.schemas.common import DataResponse
from app.schemas.transaction import TransactionCreate, TransactionRead, TransactionSummary, TransactionUpdate
from app.services.audit_log_service import log_event
from app.services.filters import build_transaction_filter

router = APIRouter(prefix="/transactions", tags=["transactions"])


async def _get_or_404(session: AsyncSession, transaction_id: int) -> Transaction:
    transaction = await session.get(Transaction, transaction_id)
    if transaction is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transação não encontrada")
    return transaction


@router.get("", response_model=DataResponse[list[TransactionRead]])
async def list_transactions(
    type_: str | None = Query(default=None, alias="type"),
    start_date: str | None = Query(default=None),
    end_date: str | None = Query(default=None),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    query = (
        select(Transaction)
        .where(*build_transaction_filter(type_, start_date, end_date))
        .order_by(Transaction.date.desc(), Transaction.created_at.desc())
    )
    result = await session.scalars(query)
    return {"data": list(result)}


@router.get("/summary", response_model=DataResponse[TransactionSummary])
async def transactions_summary(
    type_: str | None = Query(default=None, alias="type"),
    start_date: str | None = Query(default=None),
    end_date: str | None = Query(default=None),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    conditions = build_transaction_filter(type_, start_date, end_date)

    async def _sum_for(kind: TransactionType) -> float:
        total = await session.scalar(
            select(func.coalesce(func.sum(Transaction.amount), 0)).where(
                *conditions,
                Transaction.type == kind.value,
            )
        )
        return float(total or 0)

    income = await _sum_for(TransactionType.INCOME)
    expense = await _sum_for(TransactionType.EXPENSE)
    return {"data": TransactionSummary(income=income, expense=expense, balance=income - expense)}


@router.post("", response_model=DataResponse[TransactionRead], status_code=status.HTTP_201_CREATED)
async def create_transaction(
    payload: TransactionCreate,
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    data = payload.model_dump()
    data["type"] = payload.type.value
    if data["date"] is None:
        data["date"] = date.today()

    transaction = Transaction(**data)
    session.add(transaction)
    await session.commit()
    await session.refresh(transaction)
    log_event("create_transaction", f"transaction_id={transaction.id}, type={transaction.type}")
    return {"data": transaction}


@router.get("/{transaction_id}", response_model=DataResponse[TransactionRead])
async def get_transaction(transaction_id: int, session: AsyncSession = Depends(get_db_session)) -> dict:
    return {"data": await _get_or_404(session, transaction_id)}


@router.put("/{transaction_id}", response_model=DataResponse[TransactionRead])
@router.patch("/{transaction_id}", response_model=DataResponse[TransactionRead])
async def update_transaction(
    transaction_id: int,
    payload: TransactionUpdate,
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    transaction = await _get_or_404(session, transaction_id)

    updates = payload.model_dump(exclude_unset=True)
    if "type" in updates:
        updates["type"] = payload.type.value

    for field, value in updates.items():
        setattr(transaction, field, value)

    await session.commit()
    await session.refresh(transaction)
    log_event("update_transaction", f"transaction_id={transaction.id}")
    return {"data": transaction}


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(transaction_id: int, session: AsyncSession = Depends(get_db_session)) -> Response:
    transaction = await _get_or_404(session, transaction_id)

    await session.delete(transaction)
    await session.commit()
    log_event("delete_transaction", f"transaction_id={transaction_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""
거래 라우트

거래 CRUD API
"""

from fastapi import APIRouter, Depends, Response

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger import TransactionLedger
from web.dependencies import CurrentUser, get_current_user, get_db, get_db_write
from web.models.requests import TransactionRequest
from web.models.responses import TransactionResponse

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.get("", response_model=list[TransactionResponse])
async def list_transactions(
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """거래 목록"""
    transactions = await TransactionLedger(db).list(user.id)
    return [t.to_dict() for t in transactions]


@router.post("", response_model=TransactionResponse, status_code=201)
async def create_transaction(
    request: TransactionRequest,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """거래 생성

    금액 부호는 유형에 따라 결정된다 (I: +, O: -).
    """
    transaction = await TransactionLedger(db).create(user.id, request.to_draft())
    return transaction.to_dict()


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """거래 조회"""
    transaction = await TransactionLedger(db).get(user.id, transaction_id)
    return transaction.to_dict()


@router.put("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: int,
    request: TransactionRequest,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """거래 수정 (보내지 않은 필드는 유지)"""
    transaction = await TransactionLedger(db).update(
        user.id, transaction_id, request.to_draft()
    )
    return transaction.to_dict()


@router.delete("/{transaction_id}", status_code=204)
async def delete_transaction(
    transaction_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
) -> Response:
    """거래 삭제"""
    await TransactionLedger(db).delete(user.id, transaction_id)
    return Response(status_code=204)

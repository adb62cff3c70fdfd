"""
계좌 라우트

계좌 CRUD API
"""

from fastapi import APIRouter, Depends, Response

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger import AccountBook
from web.dependencies import CurrentUser, get_current_user, get_db, get_db_write
from web.models.requests import AccountRequest
from web.models.responses import AccountResponse

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.get("", response_model=list[AccountResponse])
async def list_accounts(
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """계좌 목록"""
    accounts = await AccountBook(db).list(user.id)
    return [a.to_dict() for a in accounts]


@router.post("", response_model=AccountResponse, status_code=201)
async def create_account(
    request: AccountRequest,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """계좌 생성"""
    account = await AccountBook(db).create(user.id, request.name)
    return account.to_dict()


@router.get("/{account_id}", response_model=AccountResponse)
async def get_account(
    account_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """계좌 조회"""
    account = await AccountBook(db).get(user.id, account_id)
    return account.to_dict()


@router.put("/{account_id}", response_model=AccountResponse)
async def update_account(
    account_id: int,
    request: AccountRequest,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """계좌 이름 변경"""
    account = await AccountBook(db).update(user.id, account_id, request.name)
    return account.to_dict()


@router.delete("/{account_id}", status_code=204)
async def delete_account(
    account_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
) -> Response:
    """계좌 삭제 (거래가 남아 있으면 거부)"""
    await AccountBook(db).delete(user.id, account_id)
    return Response(status_code=204)

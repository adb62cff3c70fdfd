"""
잔액 라우트

GET /balance - 요청 사용자 계좌별 잔액
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger import BalanceAggregator
from web.dependencies import CurrentUser, get_current_user, get_db
from web.models.responses import BalanceResponse

router = APIRouter(tags=["Balance"])


@router.get("/balance", response_model=list[BalanceResponse])
async def get_balance(
    as_of: datetime | None = Query(default=None, description="기준 시각 (기본: 현재)"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """계좌별 잔액

    확정되고 기준 시각 이전에 발생한 거래만 합산.
    거래가 없는 계좌는 포함되지 않으며 계좌 ID 오름차순으로 반환.
    """
    balances = await BalanceAggregator(db).get_balances(user.id, as_of)
    return [b.to_dict() for b in balances]

"""
잔액 집계

계좌별로 확정(status=1)되고 기준 시각 이전(포함)에 발생한 거래의
부호 있는 금액 합계를 계산한다. 합산은 Python Decimal로 수행한다.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from core.ledger.models import AccountBalance
from core.utils.money import to_money
from core.utils.timezone import now_utc, to_db_ts

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter


class BalanceAggregator:
    """잔액 집계기 (읽기 전용)

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def get_balances(
        self,
        user_id: int,
        as_of: datetime | None = None,
    ) -> list[AccountBalance]:
        """사용자 계좌별 잔액

        확정된 거래가 하나도 없는 계좌는 결과에서 제외된다.

        Args:
            user_id: 요청 사용자 ID
            as_of: 기준 시각 (None이면 호출 시점, 해당 시각 포함)

        Returns:
            계좌 ID 오름차순 AccountBalance 목록
        """
        cutoff = to_db_ts(as_of if as_of is not None else now_utc())

        rows = await self.db.fetchall(
            """
            SELECT t.acc_id, t.amount
            FROM transactions t
            JOIN accounts a ON a.id = t.acc_id
            WHERE a.user_id = ?
              AND t.status = 1
              AND t.date <= ?
            ORDER BY t.acc_id, t.id
            """,
            (user_id, cutoff),
        )

        sums: dict[int, Decimal] = {}
        for acc_id, amount in rows:
            sums[acc_id] = sums.get(acc_id, Decimal("0")) + to_money(amount)

        return [
            AccountBalance(account_id=acc_id, sum=to_money(total))
            for acc_id, total in sorted(sums.items())
        ]

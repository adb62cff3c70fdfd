"""
Ledger 일관성 엔진

잔액, 거래, 이체가 서로 어긋나지 않도록 유지하는 핵심 로직.

사용 예시:
```python
from core.ledger import BalanceAggregator, TransferCoordinator, TransferDraft

# 이체 생성 (이체 + 거래 2건, 하나의 작업 단위)
coordinator = TransferCoordinator(db)
transfer = await coordinator.create(user_id, TransferDraft(
    description="Poupança",
    amount=Decimal("100"),
    date=now_utc(),
    acc_origin_id=1,
    acc_destiny_id=2,
))

# 잔액 조회
balances = await BalanceAggregator(db).get_balances(user_id)
```
"""

from core.ledger.accounts import AccountBook
from core.ledger.balance import BalanceAggregator
from core.ledger.models import (
    Account,
    AccountBalance,
    Transaction,
    TransactionDraft,
    Transfer,
    TransferDraft,
)
from core.ledger.ownership import belongs_to, ensure_belongs_to
from core.ledger.transactions import TransactionLedger
from core.ledger.transfers import TransferCoordinator

__all__ = [
    # 핵심 클래스
    "AccountBook",
    "BalanceAggregator",
    "TransactionLedger",
    "TransferCoordinator",
    # 모델
    "Account",
    "AccountBalance",
    "Transaction",
    "TransactionDraft",
    "Transfer",
    "TransferDraft",
    # 소유권
    "belongs_to",
    "ensure_belongs_to",
]

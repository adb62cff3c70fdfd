"""
Ledger 도메인 모델

accounts / transactions / transfers 테이블의 행과 1:1 대응하는 dataclass,
그리고 API 입력을 담는 Draft(모든 필드 선택적) 정의.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from core.types import TransactionType
from core.utils.money import format_money, to_money
from core.utils.timezone import from_db_ts, to_db_ts


@dataclass
class Account:
    """계좌

    Attributes:
        id: 계좌 ID
        user_id: 소유자 ID
        name: 계좌 이름 (사용자별 유일)
    """

    id: int
    user_id: int
    name: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Account":
        """DB 행에서 생성"""
        return cls(id=row["id"], user_id=row["user_id"], name=row["name"])

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {"id": self.id, "user_id": self.user_id, "name": self.name}


@dataclass
class Transaction:
    """거래 (계좌 하나에 대한 부호 있는 금액 이동)

    Attributes:
        id: 거래 ID
        description: 설명
        date: 발생 시각 (UTC)
        amount: 부호 있는 금액 (소수점 2자리)
        type: 수입(I) / 지출(O)
        acc_id: 계좌 ID
        status: True면 확정, False면 대기
        transfer_id: 이체가 생성한 거래일 때만 존재
    """

    id: int
    description: str
    date: datetime
    amount: Decimal
    type: TransactionType
    acc_id: int
    status: bool
    transfer_id: int | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Transaction":
        """DB 행에서 생성"""
        return cls(
            id=row["id"],
            description=row["description"],
            date=from_db_ts(row["date"]),
            amount=to_money(row["amount"]),
            type=TransactionType(row["type"]),
            acc_id=row["acc_id"],
            status=bool(row["status"]),
            transfer_id=row.get("transfer_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환 (금액은 "x.xx" 문자열)"""
        return {
            "id": self.id,
            "description": self.description,
            "date": to_db_ts(self.date),
            "amount": format_money(self.amount),
            "type": self.type.value,
            "acc_id": self.acc_id,
            "status": self.status,
            "transfer_id": self.transfer_id,
        }


@dataclass
class Transfer:
    """이체

    존재 자체가 상태다. 존재하면 연결된 거래 2건이 반영된 상태이고,
    삭제되면 두 거래도 함께 사라진다.
    """

    id: int
    description: str
    user_id: int
    acc_origin_id: int
    acc_destiny_id: int
    amount: Decimal
    date: datetime

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Transfer":
        """DB 행에서 생성"""
        return cls(
            id=row["id"],
            description=row["description"],
            user_id=row["user_id"],
            acc_origin_id=row["acc_origin_id"],
            acc_destiny_id=row["acc_destiny_id"],
            amount=to_money(row["amount"]),
            date=from_db_ts(row["date"]),
        )

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "id": self.id,
            "description": self.description,
            "user_id": self.user_id,
            "acc_origin_id": self.acc_origin_id,
            "acc_destiny_id": self.acc_destiny_id,
            "amount": format_money(self.amount),
            "date": to_db_ts(self.date),
        }


@dataclass(frozen=True)
class AccountBalance:
    """계좌별 잔액 집계 결과"""

    account_id: int
    sum: Decimal

    def to_dict(self) -> dict[str, Any]:
        """API 응답 형식 {"id": ..., "sum": "x.xx"}"""
        return {"id": self.account_id, "sum": format_money(self.sum)}


@dataclass
class TransactionDraft:
    """거래 생성/수정 입력 (검증 전이므로 모든 필드 선택적)

    status가 None이면 생성 시 대기(False), 수정 시 기존 값 유지.
    """

    description: str | None = None
    date: datetime | None = None
    amount: Decimal | None = None
    type: str | None = None
    acc_id: int | None = None
    status: bool | None = None


@dataclass
class TransferDraft:
    """이체 생성/수정 입력 (검증 전이므로 모든 필드 선택적)"""

    description: str | None = None
    amount: Decimal | None = None
    date: datetime | None = None
    acc_origin_id: int | None = None
    acc_destiny_id: int | None = None

"""
요청 스키마 (Pydantic)

Web API 요청 데이터 파싱.
필수 여부 검증은 Ledger 엔진이 고정된 순서와 메시지로 수행하므로
여기서는 모든 필드를 선택적으로 받는다.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from core.ledger.models import TransactionDraft, TransferDraft


class AccountRequest(BaseModel):
    """계좌 생성/수정 요청"""

    name: str | None = Field(default=None, description="계좌 이름")


class TransactionRequest(BaseModel):
    """거래 생성/수정 요청"""

    description: str | None = Field(default=None, description="설명")
    date: datetime | None = Field(default=None, description="발생 시각")
    amount: Decimal | None = Field(default=None, description="금액")
    type: str | None = Field(default=None, description="유형 (I: 수입, O: 지출)")
    acc_id: int | None = Field(default=None, description="계좌 ID")
    status: bool | None = Field(default=None, description="확정 여부")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "description": "Salário",
                    "date": "2026-10-19T12:00:00Z",
                    "amount": "100.00",
                    "type": "I",
                    "acc_id": 1,
                    "status": True,
                }
            ]
        }
    }

    def to_draft(self) -> TransactionDraft:
        """Ledger 입력으로 변환"""
        return TransactionDraft(
            description=self.description,
            date=self.date,
            amount=self.amount,
            type=self.type,
            acc_id=self.acc_id,
            status=self.status,
        )


class TransferRequest(BaseModel):
    """이체 생성/수정 요청

    소유자는 인증 정보에서 결정되므로 본문의 user_id는 무시한다.
    """

    description: str | None = Field(default=None, description="설명")
    amount: Decimal | None = Field(default=None, description="이체 금액")
    date: datetime | None = Field(default=None, description="이체 시각")
    acc_origin_id: int | None = Field(default=None, description="원 계좌 ID")
    acc_destiny_id: int | None = Field(default=None, description="대상 계좌 ID")
    user_id: int | None = Field(default=None, description="무시됨 (인증 사용자 기준)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "description": "Regular transfer",
                    "amount": "100.00",
                    "date": "2026-10-19T12:00:00Z",
                    "acc_origin_id": 1,
                    "acc_destiny_id": 2,
                }
            ]
        }
    }

    def to_draft(self) -> TransferDraft:
        """Ledger 입력으로 변환"""
        return TransferDraft(
            description=self.description,
            amount=self.amount,
            date=self.date,
            acc_origin_id=self.acc_origin_id,
            acc_destiny_id=self.acc_destiny_id,
        )

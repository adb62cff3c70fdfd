"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화. 금액은 항상 소수점 2자리 문자열.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    mode: str = Field(..., description="실행 모드 (production/test)")
    version: str = Field(..., description="API 버전")


class ErrorResponse(BaseModel):
    """오류 응답"""

    error: str = Field(..., description="사용자 노출 메시지")


class BalanceResponse(BaseModel):
    """계좌별 잔액 응답"""

    id: int = Field(..., description="계좌 ID")
    sum: str = Field(..., description="잔액 (예: \"-100.00\")")


class AccountResponse(BaseModel):
    """계좌 응답"""

    id: int = Field(..., description="계좌 ID")
    user_id: int = Field(..., description="소유자 ID")
    name: str = Field(..., description="계좌 이름")


class TransactionResponse(BaseModel):
    """거래 응답"""

    id: int = Field(..., description="거래 ID")
    description: str = Field(..., description="설명")
    date: str = Field(..., description="발생 시각 (UTC)")
    amount: str = Field(..., description="부호 있는 금액")
    type: str = Field(..., description="유형 (I/O)")
    acc_id: int = Field(..., description="계좌 ID")
    status: bool = Field(..., description="확정 여부")
    transfer_id: int | None = Field(default=None, description="생성한 이체 ID")


class TransferResponse(BaseModel):
    """이체 응답"""

    id: int = Field(..., description="이체 ID")
    description: str = Field(..., description="설명")
    user_id: int = Field(..., description="소유자 ID")
    acc_origin_id: int = Field(..., description="원 계좌 ID")
    acc_destiny_id: int = Field(..., description="대상 계좌 ID")
    amount: str = Field(..., description="이체 금액")
    date: str = Field(..., description="이체 시각 (UTC)")

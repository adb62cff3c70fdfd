"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    AccountRequest,
    TransactionRequest,
    TransferRequest,
)
from web.models.responses import (
    AccountResponse,
    BalanceResponse,
    ErrorResponse,
    HealthResponse,
    TransactionResponse,
    TransferResponse,
)

__all__ = [
    # Requests
    "AccountRequest",
    "TransactionRequest",
    "TransferRequest",
    # Responses
    "AccountResponse",
    "BalanceResponse",
    "ErrorResponse",
    "HealthResponse",
    "TransactionResponse",
    "TransferResponse",
]

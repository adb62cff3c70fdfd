"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class AppMode(str, Enum):
    """실행 모드 (운영 / 테스트)"""

    PRODUCTION = "production"
    TEST = "test"


class TransactionType(str, Enum):
    """거래 유형 (수입 / 지출)"""

    INCOME = "I"
    OUTGOING = "O"


class EntityKind(str, Enum):
    """소유권 검사 대상 엔티티 종류"""

    ACCOUNT = "ACCOUNT"
    TRANSACTION = "TRANSACTION"
    TRANSFER = "TRANSFER"

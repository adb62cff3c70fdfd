"""
core/types.py 테스트

모든 Enum이 문자열 직렬화 가능한지 확인
"""

import pytest

from core.types import AppMode, EntityKind, TransactionType


class TestAppMode:
    """AppMode 테스트"""

    def test_values(self) -> None:
        """값 확인"""
        assert AppMode.PRODUCTION.value == "production"
        assert AppMode.TEST.value == "test"

    def test_from_string(self) -> None:
        """문자열에서 생성"""
        assert AppMode("production") == AppMode.PRODUCTION
        assert AppMode("test") == AppMode.TEST

    def test_invalid(self) -> None:
        """알 수 없는 모드"""
        with pytest.raises(ValueError):
            AppMode("testnet")


class TestTransactionType:
    """TransactionType 테스트"""

    def test_values(self) -> None:
        """값 확인 (DB/API 저장 값)"""
        assert TransactionType.INCOME.value == "I"
        assert TransactionType.OUTGOING.value == "O"

    def test_str_comparison(self) -> None:
        """str 상속으로 문자열과 직접 비교 가능"""
        assert TransactionType.INCOME == "I"
        assert f"{TransactionType.OUTGOING.value}" == "O"

    def test_invalid(self) -> None:
        """소문자/알 수 없는 유형 거부"""
        with pytest.raises(ValueError):
            TransactionType("i")
        with pytest.raises(ValueError):
            TransactionType("X")


class TestEntityKind:
    """EntityKind 테스트"""

    def test_all_kinds(self) -> None:
        """소유권 검사 대상 엔티티"""
        assert {k.value for k in EntityKind} == {"ACCOUNT", "TRANSACTION", "TRANSFER"}

"""
Ledger 예외 정의

Web 계층은 status_code를 보고 HTTP 응답으로 변환한다.
"""

from core.constants import Messages


class LedgerError(Exception):
    """Ledger 예외 기본 클래스

    Args:
        message: 사용자에게 그대로 노출되는 메시지
    """

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """필수 속성 누락 또는 잘못된 값 (재시도 불가)"""

    status_code = 400


class OwnershipError(LedgerError):
    """다른 사용자의 엔티티 또는 존재하지 않는 엔티티 참조

    존재 여부를 노출하지 않도록 두 경우 모두 같은 메시지/상태 코드 사용.
    """

    status_code = 403

    def __init__(self, message: str = Messages.FORBIDDEN):
        super().__init__(message)


class NotFoundOrForbidden(OwnershipError):
    """이체 조회/수정/삭제 시 소유권 실패"""


class StoreError(LedgerError):
    """저장소(SQLite) 실패

    발생 시점에는 진행 중이던 작업 단위가 이미 롤백되어 있어야 한다.
    """

    status_code = 500

    def __init__(self, message: str = Messages.STORE_FAILURE):
        super().__init__(message)

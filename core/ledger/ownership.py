"""
소유권 검사

모든 변경/민감 조회 전에 호출하는 단일 권한 판정 함수.
거래는 계좌를 통해, 계좌와 이체는 user_id로 소유자를 판정한다.
존재하지 않는 엔티티는 다른 사용자의 엔티티와 동일하게 취급한다.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.errors import OwnershipError
from core.types import EntityKind

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter


_OWNER_QUERIES: dict[EntityKind, str] = {
    EntityKind.ACCOUNT: "SELECT 1 FROM accounts WHERE id = ? AND user_id = ?",
    EntityKind.TRANSACTION: """
        SELECT 1 FROM transactions t
        JOIN accounts a ON a.id = t.acc_id
        WHERE t.id = ? AND a.user_id = ?
    """,
    EntityKind.TRANSFER: "SELECT 1 FROM transfers WHERE id = ? AND user_id = ?",
}


async def belongs_to(
    db: SQLiteAdapter,
    kind: EntityKind,
    entity_id: int | None,
    user_id: int,
) -> bool:
    """엔티티가 사용자 소유인지 판정

    Args:
        db: SQLite 어댑터
        kind: 엔티티 종류
        entity_id: 엔티티 ID (None이면 False)
        user_id: 요청 사용자 ID

    Returns:
        소유자가 user_id이면 True, 그 외(존재하지 않음 포함) False
    """
    if entity_id is None:
        return False

    row = await db.fetchone(_OWNER_QUERIES[kind], (entity_id, user_id))
    return row is not None


async def ensure_belongs_to(
    db: SQLiteAdapter,
    kind: EntityKind,
    entity_id: int | None,
    user_id: int,
    error: type[OwnershipError] = OwnershipError,
) -> None:
    """소유권이 없으면 예외 발생

    Raises:
        OwnershipError: 소유자가 아니거나 존재하지 않는 경우 (error로 하위 타입 지정 가능)
    """
    if not await belongs_to(db, kind, entity_id, user_id):
        raise error()

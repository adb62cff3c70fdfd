"""
거래 원장

개별 거래 CRUD. 모든 작업은 요청 사용자 소유 계좌로 한정된다.

이체가 생성한 거래(transfer_id 존재)는 이체의 수명에 묶여 있으므로
공개 update/delete로는 변경할 수 없고, TransferCoordinator가
작업 단위 안에서 *_for_transfer 메서드로만 다룬다.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from core.constants import Messages
from core.errors import ValidationError
from core.ledger.models import Transaction, TransactionDraft
from core.ledger.ownership import ensure_belongs_to
from core.types import EntityKind, TransactionType
from core.utils.money import format_money, to_money
from core.utils.timezone import ensure_utc, to_db_ts

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

_SELECT = """
    SELECT t.id, t.description, t.date, t.amount, t.type,
           t.acc_id, t.status, t.transfer_id
    FROM transactions t
"""


def signed_amount(amount: Decimal, tx_type: TransactionType) -> Decimal:
    """거래 유형에 맞는 부호 적용 (수입 +, 지출 -)"""
    magnitude = to_money(amount).copy_abs()
    if tx_type == TransactionType.OUTGOING:
        return to_money(-magnitude)
    return magnitude


def validate_draft(draft: TransactionDraft) -> TransactionType:
    """필수 속성 검증 (앞 순서 규칙이 먼저 실패)

    Returns:
        검증된 거래 유형

    Raises:
        ValidationError: 첫 번째로 누락된 속성의 메시지
    """
    if not draft.description or not draft.description.strip():
        raise ValidationError(Messages.DESCRIPTION_REQUIRED)
    if draft.date is None:
        raise ValidationError(Messages.TRANSACTION_DATE_REQUIRED)
    if draft.amount is None:
        raise ValidationError(Messages.TRANSACTION_AMOUNT_REQUIRED)
    try:
        to_money(draft.amount)
    except ValueError as e:
        raise ValidationError(Messages.TRANSACTION_AMOUNT_REQUIRED) from e
    if not draft.type:
        raise ValidationError(Messages.TRANSACTION_TYPE_REQUIRED)
    if draft.acc_id is None:
        raise ValidationError(Messages.TRANSACTION_ACCOUNT_REQUIRED)

    try:
        return TransactionType(draft.type)
    except ValueError as e:
        raise ValidationError(Messages.TRANSACTION_TYPE_INVALID) from e


class TransactionLedger:
    """거래 원장

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    # -------------------------------------------------------------------------
    # 공개 CRUD
    # -------------------------------------------------------------------------

    async def create(self, user_id: int, draft: TransactionDraft) -> Transaction:
        """거래 생성

        Raises:
            ValidationError: 필수 속성 누락 또는 잘못된 유형
            OwnershipError: 계좌가 요청 사용자 소유가 아닌 경우
        """
        tx_type = validate_draft(draft)

        async with self.db.transaction():
            await ensure_belongs_to(self.db, EntityKind.ACCOUNT, draft.acc_id, user_id)
            transaction = await self._insert(
                description=draft.description.strip(),
                date=draft.date,
                amount=signed_amount(draft.amount, tx_type),
                tx_type=tx_type,
                acc_id=draft.acc_id,
                status=bool(draft.status),
            )

        logger.info(
            f"Transaction created: {transaction.id}",
            extra={"user_id": user_id, "acc_id": transaction.acc_id},
        )
        return transaction

    async def get(self, user_id: int, transaction_id: int) -> Transaction:
        """거래 조회

        Raises:
            OwnershipError: 다른 사용자 거래이거나 존재하지 않는 경우
        """
        await ensure_belongs_to(self.db, EntityKind.TRANSACTION, transaction_id, user_id)
        return await self._load(transaction_id)

    async def list(self, user_id: int) -> list[Transaction]:
        """사용자 거래 목록 (발생 시각, ID 순)"""
        rows = await self.db.fetchall_dict(
            _SELECT
            + """
            JOIN accounts a ON a.id = t.acc_id
            WHERE a.user_id = ?
            ORDER BY t.date, t.id
            """,
            (user_id,),
        )
        return [Transaction.from_row(row) for row in rows]

    async def update(
        self,
        user_id: int,
        transaction_id: int,
        draft: TransactionDraft,
    ) -> Transaction:
        """거래 수정

        draft에서 None인 필드는 기존 값을 유지한 뒤 전체를 다시 검증한다.

        Raises:
            OwnershipError: 거래 또는 새 계좌가 요청 사용자 소유가 아닌 경우
            ValidationError: 검증 실패 또는 이체가 생성한 거래
        """
        async with self.db.transaction():
            current = await self.get(user_id, transaction_id)
            if current.transfer_id is not None:
                raise ValidationError(Messages.TRANSACTION_OWNED_BY_TRANSFER)

            merged = TransactionDraft(
                description=draft.description if draft.description is not None else current.description,
                date=draft.date if draft.date is not None else current.date,
                amount=draft.amount if draft.amount is not None else current.amount,
                type=draft.type if draft.type is not None else current.type.value,
                acc_id=draft.acc_id if draft.acc_id is not None else current.acc_id,
                status=draft.status if draft.status is not None else current.status,
            )
            tx_type = validate_draft(merged)

            if merged.acc_id != current.acc_id:
                await ensure_belongs_to(self.db, EntityKind.ACCOUNT, merged.acc_id, user_id)

            updated = replace(
                current,
                description=merged.description.strip(),
                date=ensure_utc(merged.date),
                amount=signed_amount(merged.amount, tx_type),
                type=tx_type,
                acc_id=merged.acc_id,
                status=bool(merged.status),
            )
            await self._write(updated)

        logger.info(f"Transaction updated: {transaction_id}", extra={"user_id": user_id})
        return updated

    async def delete(self, user_id: int, transaction_id: int) -> None:
        """거래 삭제

        Raises:
            OwnershipError: 다른 사용자 거래이거나 존재하지 않는 경우
            ValidationError: 이체가 생성한 거래
        """
        async with self.db.transaction():
            current = await self.get(user_id, transaction_id)
            if current.transfer_id is not None:
                raise ValidationError(Messages.TRANSACTION_OWNED_BY_TRANSFER)

            await self.db.execute("DELETE FROM transactions WHERE id = ?", (transaction_id,))

        logger.info(f"Transaction deleted: {transaction_id}", extra={"user_id": user_id})

    # -------------------------------------------------------------------------
    # 이체 전용 (호출자의 작업 단위 안에서만 사용)
    # -------------------------------------------------------------------------

    def _require_unit_of_work(self) -> None:
        if not self.db.in_transaction:
            raise RuntimeError("Transfer transactions must be written inside a unit of work")

    async def insert_for_transfer(
        self,
        transfer_id: int,
        description: str,
        date: datetime,
        amount: Decimal,
        tx_type: TransactionType,
        acc_id: int,
    ) -> Transaction:
        """이체 거래 삽입 (확정 상태, 부호는 유형으로 결정)"""
        self._require_unit_of_work()
        return await self._insert(
            description=description,
            date=date,
            amount=signed_amount(amount, tx_type),
            tx_type=tx_type,
            acc_id=acc_id,
            status=True,
            transfer_id=transfer_id,
        )

    async def list_for_transfer(self, transfer_id: int) -> list[Transaction]:
        """이체에 연결된 거래 (지출 → 수입 순)"""
        rows = await self.db.fetchall_dict(
            _SELECT + " WHERE t.transfer_id = ? ORDER BY t.type DESC, t.id",
            (transfer_id,),
        )
        return [Transaction.from_row(row) for row in rows]

    async def rewrite_for_transfer(
        self,
        transfer_id: int,
        tx_type: TransactionType,
        description: str,
        date: datetime,
        amount: Decimal,
        acc_id: int,
    ) -> int:
        """이체 거래 중 한쪽(유형 기준)을 새 값으로 갱신

        Returns:
            갱신된 행 수 (정상이면 1)
        """
        self._require_unit_of_work()
        cursor = await self.db.execute(
            """
            UPDATE transactions
            SET description = ?, date = ?, amount = ?, acc_id = ?, status = 1
            WHERE transfer_id = ? AND type = ?
            """,
            (
                description,
                to_db_ts(date),
                format_money(signed_amount(amount, tx_type)),
                acc_id,
                transfer_id,
                tx_type.value,
            ),
        )
        return cursor.rowcount

    async def delete_for_transfer(self, transfer_id: int) -> int:
        """이체에 연결된 거래 전체 삭제

        Returns:
            삭제된 행 수
        """
        self._require_unit_of_work()
        cursor = await self.db.execute(
            "DELETE FROM transactions WHERE transfer_id = ?",
            (transfer_id,),
        )
        return cursor.rowcount

    # -------------------------------------------------------------------------
    # 내부
    # -------------------------------------------------------------------------

    async def _insert(
        self,
        description: str,
        date: datetime,
        amount: Decimal,
        tx_type: TransactionType,
        acc_id: int,
        status: bool,
        transfer_id: int | None = None,
    ) -> Transaction:
        date = ensure_utc(date)
        transaction_id = await self.db.insert(
            """
            INSERT INTO transactions (
                description, date, amount, type, acc_id, status, transfer_id
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                description,
                to_db_ts(date),
                format_money(amount),
                tx_type.value,
                acc_id,
                1 if status else 0,
                transfer_id,
            ),
        )
        return Transaction(
            id=transaction_id,
            description=description,
            date=date,
            amount=to_money(amount),
            type=tx_type,
            acc_id=acc_id,
            status=status,
            transfer_id=transfer_id,
        )

    async def _write(self, transaction: Transaction) -> None:
        await self.db.execute(
            """
            UPDATE transactions
            SET description = ?, date = ?, amount = ?, type = ?, acc_id = ?, status = ?
            WHERE id = ?
            """,
            (
                transaction.description,
                to_db_ts(transaction.date),
                format_money(transaction.amount),
                transaction.type.value,
                transaction.acc_id,
                1 if transaction.status else 0,
                transaction.id,
            ),
        )

    async def _load(self, transaction_id: int) -> Transaction:
        row = await self.db.fetchone_dict(_SELECT + " WHERE t.id = ?", (transaction_id,))
        return Transaction.from_row(row)

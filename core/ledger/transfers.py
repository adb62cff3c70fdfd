"""
이체 코디네이터

이체 1건과 그에 연결된 거래 2건(원 계좌 지출, 대상 계좌 수입)을
하나의 작업 단위로 생성/수정/삭제한다. 작업 단위 안의 어느 쓰기든
실패하면 전체가 롤백되므로 일부만 반영된 이체는 존재하지 않는다.

검증 순서 (첫 번째 실패 규칙의 메시지 반환):
1. 설명
2. 금액 (0.00 불가)
3. 날짜
4. 원 계좌
5. 대상 계좌
6. 원 계좌 != 대상 계좌
7. 두 계좌 모두 요청 사용자 소유
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.constants import Messages, TransferDescriptions
from core.errors import NotFoundOrForbidden, StoreError, ValidationError
from core.ledger.models import Transfer, TransferDraft
from core.ledger.ownership import belongs_to, ensure_belongs_to
from core.ledger.transactions import TransactionLedger
from core.types import EntityKind, TransactionType
from core.utils.money import format_money, to_money
from core.utils.timezone import ensure_utc, to_db_ts

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

_SELECT = """
    SELECT id, description, user_id, acc_origin_id, acc_destiny_id, amount, date
    FROM transfers
"""


def _has_amount(value) -> bool:
    """0이 아니고 표현 가능한 금액인지 (0.00으로 반올림되는 값도 거부)"""
    try:
        return not to_money(value).is_zero()
    except ValueError:
        return False


class TransferCoordinator:
    """이체 코디네이터

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.ledger = TransactionLedger(db)

    async def validate(self, user_id: int, draft: TransferDraft) -> None:
        """이체 입력 검증 (쓰기 전에 수행)

        Raises:
            ValidationError: 규칙 순서상 첫 번째로 실패한 규칙의 메시지
        """
        if not draft.description or not draft.description.strip():
            raise ValidationError(Messages.DESCRIPTION_REQUIRED)
        if draft.amount is None or not _has_amount(draft.amount):
            raise ValidationError(Messages.TRANSFER_AMOUNT_REQUIRED)
        if draft.date is None:
            raise ValidationError(Messages.TRANSFER_DATE_REQUIRED)
        if draft.acc_origin_id is None:
            raise ValidationError(Messages.TRANSFER_ORIGIN_REQUIRED)
        if draft.acc_destiny_id is None:
            raise ValidationError(Messages.TRANSFER_DESTINY_REQUIRED)
        if draft.acc_origin_id == draft.acc_destiny_id:
            raise ValidationError(Messages.TRANSFER_SAME_ACCOUNT)

        for acc_id in (draft.acc_origin_id, draft.acc_destiny_id):
            if not await belongs_to(self.db, EntityKind.ACCOUNT, acc_id, user_id):
                raise ValidationError(Messages.TRANSFER_ACCOUNT_NOT_OWNED)

    async def create(self, user_id: int, draft: TransferDraft) -> Transfer:
        """이체 생성 (이체 + 지출 거래 + 수입 거래)

        Raises:
            ValidationError: 검증 실패
            StoreError: 저장 실패 (작업 단위 전체 롤백 후)
        """
        await self.validate(user_id, draft)

        amount = to_money(draft.amount).copy_abs()
        date = ensure_utc(draft.date)
        description = draft.description.strip()

        async with self.db.transaction():
            transfer_id = await self.db.insert(
                """
                INSERT INTO transfers (
                    description, user_id, acc_origin_id, acc_destiny_id, amount, date
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    description,
                    user_id,
                    draft.acc_origin_id,
                    draft.acc_destiny_id,
                    format_money(amount),
                    to_db_ts(date),
                ),
            )
            transfer = Transfer(
                id=transfer_id,
                description=description,
                user_id=user_id,
                acc_origin_id=draft.acc_origin_id,
                acc_destiny_id=draft.acc_destiny_id,
                amount=amount,
                date=date,
            )
            await self._write_mirrors(transfer, insert=True)

        logger.info(
            f"Transfer created: {transfer_id}",
            extra={
                "user_id": user_id,
                "acc_origin_id": transfer.acc_origin_id,
                "acc_destiny_id": transfer.acc_destiny_id,
                "amount": format_money(amount),
            },
        )
        return transfer

    async def get_by_id(self, user_id: int, transfer_id: int) -> Transfer:
        """이체 조회

        Raises:
            NotFoundOrForbidden: 존재하지 않거나 다른 사용자 이체
        """
        await ensure_belongs_to(
            self.db, EntityKind.TRANSFER, transfer_id, user_id, error=NotFoundOrForbidden
        )
        row = await self.db.fetchone_dict(_SELECT + " WHERE id = ?", (transfer_id,))
        return Transfer.from_row(row)

    async def list(self, user_id: int) -> list[Transfer]:
        """사용자 이체 목록 (ID 오름차순)"""
        rows = await self.db.fetchall_dict(
            _SELECT + " WHERE user_id = ? ORDER BY id",
            (user_id,),
        )
        return [Transfer.from_row(row) for row in rows]

    async def update(
        self,
        user_id: int,
        transfer_id: int,
        draft: TransferDraft,
    ) -> Transfer:
        """이체 수정 (이체 행 + 연결된 거래 2건 재작성)

        Raises:
            NotFoundOrForbidden: 존재하지 않거나 다른 사용자 이체
            ValidationError: 검증 실패
            StoreError: 저장 실패 (작업 단위 전체 롤백 후)
        """
        await ensure_belongs_to(
            self.db, EntityKind.TRANSFER, transfer_id, user_id, error=NotFoundOrForbidden
        )
        await self.validate(user_id, draft)

        transfer = Transfer(
            id=transfer_id,
            description=draft.description.strip(),
            user_id=user_id,
            acc_origin_id=draft.acc_origin_id,
            acc_destiny_id=draft.acc_destiny_id,
            amount=to_money(draft.amount).copy_abs(),
            date=ensure_utc(draft.date),
        )

        async with self.db.transaction():
            await self.db.execute(
                """
                UPDATE transfers
                SET description = ?, acc_origin_id = ?, acc_destiny_id = ?,
                    amount = ?, date = ?
                WHERE id = ? AND user_id = ?
                """,
                (
                    transfer.description,
                    transfer.acc_origin_id,
                    transfer.acc_destiny_id,
                    format_money(transfer.amount),
                    to_db_ts(transfer.date),
                    transfer_id,
                    user_id,
                ),
            )
            await self._write_mirrors(transfer, insert=False)

        logger.info(
            f"Transfer updated: {transfer_id}",
            extra={"user_id": user_id, "amount": format_money(transfer.amount)},
        )
        return transfer

    async def delete(self, user_id: int, transfer_id: int) -> None:
        """이체 삭제 (연결된 거래 2건 포함)

        Raises:
            NotFoundOrForbidden: 존재하지 않거나 다른 사용자 이체
            StoreError: 저장 실패 (작업 단위 전체 롤백 후)
        """
        await ensure_belongs_to(
            self.db, EntityKind.TRANSFER, transfer_id, user_id, error=NotFoundOrForbidden
        )

        async with self.db.transaction():
            removed = await self.ledger.delete_for_transfer(transfer_id)
            await self.db.execute(
                "DELETE FROM transfers WHERE id = ? AND user_id = ?",
                (transfer_id, user_id),
            )

        logger.info(
            f"Transfer deleted: {transfer_id}",
            extra={"user_id": user_id, "transactions_removed": removed},
        )

    async def _write_mirrors(self, transfer: Transfer, insert: bool) -> None:
        """지출/수입 거래 한 쌍을 삽입하거나 재작성 (작업 단위 안에서 호출)"""
        legs = (
            (
                TransactionType.OUTGOING,
                TransferDescriptions.OUTGOING.format(acc_id=transfer.acc_origin_id),
                transfer.acc_origin_id,
            ),
            (
                TransactionType.INCOME,
                TransferDescriptions.INCOMING.format(acc_id=transfer.acc_destiny_id),
                transfer.acc_destiny_id,
            ),
        )

        for tx_type, description, acc_id in legs:
            if insert:
                await self.ledger.insert_for_transfer(
                    transfer_id=transfer.id,
                    description=description,
                    date=transfer.date,
                    amount=transfer.amount,
                    tx_type=tx_type,
                    acc_id=acc_id,
                )
                continue

            updated = await self.ledger.rewrite_for_transfer(
                transfer_id=transfer.id,
                tx_type=tx_type,
                description=description,
                date=transfer.date,
                amount=transfer.amount,
                acc_id=acc_id,
            )
            if updated != 1:
                # 한 쌍이 깨진 이체는 반영하지 않고 롤백
                logger.error(
                    f"Transfer {transfer.id} has {updated} {tx_type.value} transactions",
                )
                raise StoreError()

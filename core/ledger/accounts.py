"""
계좌 관리

사용자별 계좌 CRUD. 모든 조회/변경은 요청 사용자 소유 계좌로 한정된다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.constants import Messages
from core.errors import ValidationError
from core.ledger.models import Account
from core.ledger.ownership import ensure_belongs_to
from core.types import EntityKind

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


class AccountBook:
    """계좌 관리

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def _validate_name(
        self,
        user_id: int,
        name: str | None,
        exclude_id: int | None = None,
    ) -> str:
        if not name or not name.strip():
            raise ValidationError(Messages.ACCOUNT_NAME_REQUIRED)

        name = name.strip()
        row = await self.db.fetchone(
            "SELECT id FROM accounts WHERE user_id = ? AND name = ?",
            (user_id, name),
        )
        if row is not None and row[0] != exclude_id:
            raise ValidationError(Messages.ACCOUNT_NAME_DUPLICATED)

        return name

    async def create(self, user_id: int, name: str | None) -> Account:
        """계좌 생성

        Raises:
            ValidationError: 이름 누락 또는 중복
        """
        async with self.db.transaction():
            name = await self._validate_name(user_id, name)
            account_id = await self.db.insert(
                "INSERT INTO accounts (user_id, name) VALUES (?, ?)",
                (user_id, name),
            )

        logger.info(
            f"Account created: {account_id}",
            extra={"user_id": user_id},
        )
        return Account(id=account_id, user_id=user_id, name=name)

    async def list(self, user_id: int) -> list[Account]:
        """사용자 계좌 목록 (ID 오름차순)"""
        rows = await self.db.fetchall_dict(
            "SELECT id, user_id, name FROM accounts WHERE user_id = ? ORDER BY id",
            (user_id,),
        )
        return [Account.from_row(row) for row in rows]

    async def get(self, user_id: int, account_id: int) -> Account:
        """계좌 조회

        Raises:
            OwnershipError: 다른 사용자 계좌이거나 존재하지 않는 경우
        """
        await ensure_belongs_to(self.db, EntityKind.ACCOUNT, account_id, user_id)

        row = await self.db.fetchone_dict(
            "SELECT id, user_id, name FROM accounts WHERE id = ?",
            (account_id,),
        )
        return Account.from_row(row)

    async def update(self, user_id: int, account_id: int, name: str | None) -> Account:
        """계좌 이름 변경"""
        async with self.db.transaction():
            await ensure_belongs_to(self.db, EntityKind.ACCOUNT, account_id, user_id)
            name = await self._validate_name(user_id, name, exclude_id=account_id)
            await self.db.execute(
                "UPDATE accounts SET name = ? WHERE id = ?",
                (name, account_id),
            )

        logger.info(f"Account renamed: {account_id}", extra={"user_id": user_id})
        return Account(id=account_id, user_id=user_id, name=name)

    async def delete(self, user_id: int, account_id: int) -> None:
        """계좌 삭제

        Raises:
            OwnershipError: 다른 사용자 계좌이거나 존재하지 않는 경우
            ValidationError: 거래가 남아 있는 계좌
        """
        async with self.db.transaction():
            await ensure_belongs_to(self.db, EntityKind.ACCOUNT, account_id, user_id)

            row = await self.db.fetchone(
                "SELECT 1 FROM transactions WHERE acc_id = ? LIMIT 1",
                (account_id,),
            )
            if row is not None:
                raise ValidationError(Messages.ACCOUNT_HAS_TRANSACTIONS)

            await self.db.execute("DELETE FROM accounts WHERE id = ?", (account_id,))

        logger.info(f"Account deleted: {account_id}", extra={"user_id": user_id})

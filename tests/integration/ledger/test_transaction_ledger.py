"""TransactionLedger 통합 테스트"""

from datetime import timedelta
from decimal import Decimal

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Messages
from core.errors import OwnershipError, ValidationError
from core.ledger import (
    TransactionDraft,
    TransactionLedger,
    TransferCoordinator,
    TransferDraft,
)
from core.ledger.transactions import signed_amount
from core.types import TransactionType
from core.utils.timezone import now_utc

USER_1 = 10000
USER_2 = 20000
ACC_U1_MAIN = 10000
ACC_U1_SAVINGS = 10001
ACC_U2_MAIN = 20000


def make_draft(**overrides) -> TransactionDraft:
    """유효한 거래 입력 (필드별 덮어쓰기 가능)"""
    values = {
        "description": "Mercado",
        "date": now_utc() - timedelta(hours=1),
        "amount": Decimal("200"),
        "type": "O",
        "acc_id": ACC_U1_MAIN,
    }
    values.update(overrides)
    return TransactionDraft(**values)


class TestSignedAmount:
    """signed_amount 테스트"""

    def test_income_positive(self) -> None:
        assert signed_amount(Decimal("-50"), TransactionType.INCOME) == Decimal("50.00")

    def test_outgoing_negative(self) -> None:
        assert signed_amount(Decimal("200"), TransactionType.OUTGOING) == Decimal("-200.00")


class TestCreate:
    """거래 생성 테스트"""

    @pytest.mark.asyncio
    async def test_create_outgoing(self, db: SQLiteAdapter) -> None:
        """지출은 음수로 저장, 기본 상태는 대기"""
        transaction = await TransactionLedger(db).create(USER_1, make_draft())

        assert transaction.amount == Decimal("-200.00")
        assert transaction.type == TransactionType.OUTGOING
        assert transaction.status is False
        assert transaction.transfer_id is None

        row = await db.fetchone(
            "SELECT amount, type, status FROM transactions WHERE id = ?",
            (transaction.id,),
        )
        assert row == ("-200.00", "O", 0)

    @pytest.mark.asyncio
    async def test_create_income_confirmed(self, db: SQLiteAdapter) -> None:
        """수입은 양수"""
        transaction = await TransactionLedger(db).create(
            USER_1, make_draft(type="I", amount=Decimal("100"), status=True)
        )

        assert transaction.to_dict()["amount"] == "100.00"
        assert transaction.status is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"description": None}, Messages.DESCRIPTION_REQUIRED),
            ({"description": "   "}, Messages.DESCRIPTION_REQUIRED),
            ({"date": None}, Messages.TRANSACTION_DATE_REQUIRED),
            ({"amount": None}, Messages.TRANSACTION_AMOUNT_REQUIRED),
            ({"amount": Decimal("1e27")}, Messages.TRANSACTION_AMOUNT_REQUIRED),
            ({"type": None}, Messages.TRANSACTION_TYPE_REQUIRED),
            ({"acc_id": None}, Messages.TRANSACTION_ACCOUNT_REQUIRED),
            ({"type": "X"}, Messages.TRANSACTION_TYPE_INVALID),
        ],
    )
    async def test_validation(self, db: SQLiteAdapter, overrides, message) -> None:
        """누락/잘못된 속성"""
        with pytest.raises(ValidationError) as exc_info:
            await TransactionLedger(db).create(USER_1, make_draft(**overrides))

        assert exc_info.value.message == message
        assert await db.fetchall("SELECT id FROM transactions") == []

    @pytest.mark.asyncio
    async def test_validation_order(self, db: SQLiteAdapter) -> None:
        """여러 속성 누락 시 앞 순서 메시지"""
        with pytest.raises(ValidationError) as exc_info:
            await TransactionLedger(db).create(USER_1, TransactionDraft(description="x"))

        assert exc_info.value.message == Messages.TRANSACTION_DATE_REQUIRED

    @pytest.mark.asyncio
    async def test_foreign_account(self, db: SQLiteAdapter) -> None:
        """다른 사용자 계좌에는 생성 불가"""
        with pytest.raises(OwnershipError) as exc_info:
            await TransactionLedger(db).create(USER_1, make_draft(acc_id=ACC_U2_MAIN))

        assert exc_info.value.message == "Não autorizado"
        assert exc_info.value.status_code == 403
        assert await db.fetchall("SELECT id FROM transactions") == []


class TestRead:
    """거래 조회 테스트"""

    @pytest.mark.asyncio
    async def test_get(self, db: SQLiteAdapter) -> None:
        ledger = TransactionLedger(db)
        created = await ledger.create(USER_1, make_draft())

        fetched = await ledger.get(USER_1, created.id)

        assert fetched == created

    @pytest.mark.asyncio
    async def test_get_foreign_and_missing_identical(self, db: SQLiteAdapter) -> None:
        """다른 사용자 거래와 없는 거래는 같은 오류"""
        ledger = TransactionLedger(db)
        created = await ledger.create(USER_1, make_draft())

        with pytest.raises(OwnershipError) as foreign:
            await ledger.get(USER_2, created.id)
        with pytest.raises(OwnershipError) as missing:
            await ledger.get(USER_2, 99999)

        assert foreign.value.message == missing.value.message

    @pytest.mark.asyncio
    async def test_list_scoped_and_ordered(self, db: SQLiteAdapter) -> None:
        """사용자 거래만, 발생 시각 순"""
        ledger = TransactionLedger(db)
        later = await ledger.create(USER_1, make_draft(date=now_utc() - timedelta(hours=1)))
        earlier = await ledger.create(
            USER_1, make_draft(date=now_utc() - timedelta(days=2), acc_id=ACC_U1_SAVINGS)
        )
        await ledger.create(USER_2, make_draft(acc_id=ACC_U2_MAIN))

        transactions = await ledger.list(USER_1)

        assert [t.id for t in transactions] == [earlier.id, later.id]


class TestUpdate:
    """거래 수정 테스트"""

    @pytest.mark.asyncio
    async def test_partial_update_keeps_fields(self, db: SQLiteAdapter) -> None:
        """보내지 않은 필드는 유지"""
        ledger = TransactionLedger(db)
        created = await ledger.create(USER_1, make_draft())

        updated = await ledger.update(USER_1, created.id, TransactionDraft(amount=Decimal("50")))

        assert updated.amount == Decimal("-50.00")
        assert updated.description == created.description
        assert updated.date == created.date
        assert await ledger.get(USER_1, created.id) == updated

    @pytest.mark.asyncio
    async def test_type_change_flips_sign(self, db: SQLiteAdapter) -> None:
        """유형 변경 시 부호 재계산"""
        ledger = TransactionLedger(db)
        created = await ledger.create(USER_1, make_draft())

        updated = await ledger.update(USER_1, created.id, TransactionDraft(type="I", status=True))

        assert updated.amount == Decimal("200.00")
        assert updated.status is True

    @pytest.mark.asyncio
    async def test_invalid_type(self, db: SQLiteAdapter) -> None:
        ledger = TransactionLedger(db)
        created = await ledger.create(USER_1, make_draft())

        with pytest.raises(ValidationError) as exc_info:
            await ledger.update(USER_1, created.id, TransactionDraft(type="Z"))

        assert exc_info.value.message == Messages.TRANSACTION_TYPE_INVALID

    @pytest.mark.asyncio
    async def test_move_to_foreign_account(self, db: SQLiteAdapter) -> None:
        """다른 사용자 계좌로 이동 불가"""
        ledger = TransactionLedger(db)
        created = await ledger.create(USER_1, make_draft())

        with pytest.raises(OwnershipError):
            await ledger.update(USER_1, created.id, TransactionDraft(acc_id=ACC_U2_MAIN))

        assert (await ledger.get(USER_1, created.id)).acc_id == ACC_U1_MAIN

    @pytest.mark.asyncio
    async def test_foreign_transaction(self, db: SQLiteAdapter) -> None:
        ledger = TransactionLedger(db)
        created = await ledger.create(USER_1, make_draft())

        with pytest.raises(OwnershipError):
            await ledger.update(USER_2, created.id, TransactionDraft(amount=Decimal("1")))


class TestDelete:
    """거래 삭제 테스트"""

    @pytest.mark.asyncio
    async def test_delete(self, db: SQLiteAdapter) -> None:
        ledger = TransactionLedger(db)
        created = await ledger.create(USER_1, make_draft())

        await ledger.delete(USER_1, created.id)

        assert await ledger.list(USER_1) == []

    @pytest.mark.asyncio
    async def test_delete_foreign(self, db: SQLiteAdapter) -> None:
        ledger = TransactionLedger(db)
        created = await ledger.create(USER_1, make_draft())

        with pytest.raises(OwnershipError):
            await ledger.delete(USER_2, created.id)

        assert len(await ledger.list(USER_1)) == 1


class TestTransferLegs:
    """이체가 생성한 거래 보호 테스트"""

    @pytest.mark.asyncio
    async def test_transfer_leg_protected(self, db: SQLiteAdapter) -> None:
        """이체 거래는 공개 수정/삭제 불가"""
        transfer = await TransferCoordinator(db).create(
            USER_1,
            TransferDraft(
                description="Poupança",
                amount=Decimal("100"),
                date=now_utc() - timedelta(hours=1),
                acc_origin_id=ACC_U1_MAIN,
                acc_destiny_id=ACC_U1_SAVINGS,
            ),
        )
        ledger = TransactionLedger(db)
        legs = await ledger.list_for_transfer(transfer.id)

        with pytest.raises(ValidationError) as exc_info:
            await ledger.update(USER_1, legs[0].id, TransactionDraft(amount=Decimal("1")))
        assert exc_info.value.message == Messages.TRANSACTION_OWNED_BY_TRANSFER

        with pytest.raises(ValidationError):
            await ledger.delete(USER_1, legs[1].id)

        assert [t.amount for t in await ledger.list_for_transfer(transfer.id)] == [
            Decimal("-100.00"),
            Decimal("100.00"),
        ]

    @pytest.mark.asyncio
    async def test_transfer_methods_require_unit_of_work(self, db: SQLiteAdapter) -> None:
        """이체 전용 메서드는 작업 단위 밖에서 호출 불가"""
        ledger = TransactionLedger(db)

        with pytest.raises(RuntimeError):
            await ledger.delete_for_transfer(1)
        with pytest.raises(RuntimeError):
            await ledger.insert_for_transfer(
                transfer_id=1,
                description="x",
                date=now_utc(),
                amount=Decimal("1"),
                tx_type=TransactionType.INCOME,
                acc_id=ACC_U1_MAIN,
            )

"""
SQLite 어댑터

WAL 모드로 SQLite 연결 관리.
요청마다 독립된 연결을 열고, 여러 행에 걸친 쓰기는
transaction() 작업 단위로 묶어 원자적으로 처리한다.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

from core.errors import StoreError

logger = logging.getLogger(__name__)


async def create_connection(
    db_path: Path | str,
    readonly: bool = False,
) -> aiosqlite.Connection:
    """SQLite 연결 생성 (WAL 모드)

    Args:
        db_path: DB 파일 경로
        readonly: 읽기 전용 여부

    Returns:
        aiosqlite 연결 객체
    """
    db_path_str = str(db_path)

    # 디렉토리가 없으면 생성
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    if readonly:
        conn = await aiosqlite.connect(f"file:{db_path_str}?mode=ro", uri=True)
    else:
        conn = await aiosqlite.connect(db_path_str)
        # WAL 모드 설정 (쓰기 연결에서만 변경 가능)
        await conn.execute("PRAGMA journal_mode=WAL")

    # 동시 접근 설정
    await conn.execute("PRAGMA busy_timeout=30000")  # 30초 대기

    # 외래 키 제약 활성화
    await conn.execute("PRAGMA foreign_keys=ON")

    logger.debug(
        "SQLite 연결 생성",
        extra={"db_path": db_path_str, "readonly": readonly},
    )

    return conn


class SQLiteAdapter:
    """SQLite 어댑터

    transaction()은 재진입 가능한 작업 단위다. 가장 바깥 블록만
    BEGIN/COMMIT/ROLLBACK을 수행하고, 안쪽 블록은 바깥 작업 단위에 합류한다.
    aiosqlite 오류는 모두 StoreError로 변환된다.

    Args:
        db_path: DB 파일 경로
        readonly: 읽기 전용 여부 (조회용)

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as adapter:
        async with adapter.transaction():
            await adapter.execute("INSERT INTO ...")
            await adapter.execute("INSERT INTO ...")
    ```
    """

    def __init__(self, db_path: Path | str, readonly: bool = False):
        self.db_path = Path(db_path)
        self.readonly = readonly
        self._conn: aiosqlite.Connection | None = None
        self._tx_depth = 0

    @property
    def is_connected(self) -> bool:
        """연결 상태 확인"""
        return self._conn is not None

    @property
    def in_transaction(self) -> bool:
        """작업 단위 진행 중 여부"""
        return self._tx_depth > 0

    async def connect(self) -> None:
        """연결 생성"""
        if self._conn is not None:
            return

        try:
            self._conn = await create_connection(self.db_path, self.readonly)
        except aiosqlite.Error as e:
            logger.error(f"SQLite 연결 실패: {e}", extra={"db_path": str(self.db_path)})
            raise StoreError() from e

    async def close(self) -> None:
        """연결 종료"""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            self._tx_depth = 0
            logger.debug("SQLite 연결 종료")

    def _require_conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise RuntimeError("Not connected to database")
        return self._conn

    async def execute(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Cursor:
        """SQL 실행"""
        conn = self._require_conn()

        try:
            if parameters:
                return await conn.execute(sql, parameters)
            return await conn.execute(sql)
        except aiosqlite.Error as e:
            logger.error(f"SQL 실행 실패: {e}")
            raise StoreError() from e

    async def executemany(
        self,
        sql: str,
        parameters: list[tuple[Any, ...]],
    ) -> aiosqlite.Cursor:
        """SQL 다중 실행"""
        conn = self._require_conn()

        try:
            return await conn.executemany(sql, parameters)
        except aiosqlite.Error as e:
            logger.error(f"SQL 다중 실행 실패: {e}")
            raise StoreError() from e

    async def insert(
        self,
        sql: str,
        parameters: tuple[Any, ...],
    ) -> int:
        """INSERT 실행 후 생성된 rowid 반환"""
        cursor = await self.execute(sql, parameters)
        return cursor.lastrowid

    async def fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> tuple[Any, ...] | None:
        """단일 행 조회"""
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchone()

    async def fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[tuple[Any, ...]]:
        """전체 행 조회"""
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchall()

    async def fetchone_dict(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> dict[str, Any] | None:
        """단일 행을 {컬럼명: 값} dict로 조회"""
        cursor = await self.execute(sql, parameters)
        row = await cursor.fetchone()
        if row is None:
            return None
        columns = [desc[0] for desc in cursor.description]
        return dict(zip(columns, row))

    async def fetchall_dict(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[dict[str, Any]]:
        """전체 행을 dict 목록으로 조회"""
        cursor = await self.execute(sql, parameters)
        rows = await cursor.fetchall()
        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row)) for row in rows]

    async def commit(self) -> None:
        """커밋"""
        if self._conn is not None:
            try:
                await self._conn.commit()
            except aiosqlite.Error as e:
                logger.error(f"커밋 실패: {e}")
                raise StoreError() from e

    async def rollback(self) -> None:
        """롤백"""
        if self._conn is not None:
            await self._conn.rollback()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["SQLiteAdapter"]:
        """트랜잭션 컨텍스트 매니저 (작업 단위)

        성공 시 자동 커밋, 예외 시 자동 롤백.
        중첩 호출 시 가장 바깥 블록이 커밋/롤백을 담당한다.

        사용 예시:
        ```python
        async with adapter.transaction():
            await adapter.execute("INSERT INTO ...")
            # 성공 시 자동 커밋
        ```
        """
        conn = self._require_conn()

        if self._tx_depth > 0:
            self._tx_depth += 1
            try:
                yield self
            finally:
                self._tx_depth -= 1
            return

        if not conn.in_transaction:
            await self.execute("BEGIN")
        self._tx_depth = 1

        try:
            yield self
            await self.commit()
        except BaseException:
            await self.rollback()
            logger.warning("트랜잭션 롤백")
            raise
        finally:
            self._tx_depth = 0

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


async def init_schema(adapter: SQLiteAdapter) -> None:
    """스키마 초기화 (테이블 생성)

    금액은 소수점 2자리 고정 문자열(TEXT), 시각은 UTC ISO 8601(TEXT)로 저장.

    Args:
        adapter: 연결된 SQLiteAdapter
    """
    # accounts
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS accounts (
            id           INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id      INTEGER NOT NULL,
            name         TEXT NOT NULL,
            created_at   TEXT NOT NULL DEFAULT (datetime('now')),

            UNIQUE(user_id, name)
        )
    """)

    # transfers
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS transfers (
            id               INTEGER PRIMARY KEY AUTOINCREMENT,
            description      TEXT NOT NULL,
            user_id          INTEGER NOT NULL,
            acc_origin_id    INTEGER NOT NULL REFERENCES accounts(id),
            acc_destiny_id   INTEGER NOT NULL REFERENCES accounts(id),
            amount           TEXT NOT NULL,
            date             TEXT NOT NULL
        )
    """)

    # transactions
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS transactions (
            id           INTEGER PRIMARY KEY AUTOINCREMENT,
            description  TEXT NOT NULL,
            date         TEXT NOT NULL,
            amount       TEXT NOT NULL,
            type         TEXT NOT NULL CHECK (type IN ('I', 'O')),
            acc_id       INTEGER NOT NULL REFERENCES accounts(id),
            status       INTEGER NOT NULL DEFAULT 0,
            transfer_id  INTEGER REFERENCES transfers(id)
        )
    """)

    # 인덱스 생성
    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_accounts_user
        ON accounts(user_id)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_transactions_acc_date
        ON transactions(acc_id, status, date)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_transactions_transfer
        ON transactions(transfer_id)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_transfers_user
        ON transfers(user_id)
    """)

    await adapter.commit()

    logger.info("스키마 초기화 완료")

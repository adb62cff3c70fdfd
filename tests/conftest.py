"""
pytest 공통 fixture 정의

설정 파일, 임시 DB, 기본 계좌 데이터 fixture
"""

import tempfile
from pathlib import Path

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema


# 사용자/계좌 고정 ID
USER_1 = 10000
USER_2 = 20000

ACC_U1_MAIN = 10000
ACC_U1_SAVINGS = 10001
ACC_U2_MAIN = 20000
ACC_U2_SAVINGS = 20001


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_secrets_file(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성"""
    secrets_content = """# 테스트용 secrets.yaml
mode: test

web:
  secret_key: "test_jwt_secret_key_xyz"
"""
    secrets_path = temp_dir / "secrets.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def temp_secrets_file_production(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성 (production 모드)"""
    secrets_content = """mode: production

web:
  secret_key: "prod_jwt_secret_key_xyz"
"""
    secrets_path = temp_dir / "secrets_prod.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def temp_secrets_file_invalid_mode(temp_dir: Path) -> Path:
    """잘못된 모드의 secrets.yaml 파일 생성"""
    secrets_content = """mode: invalid_mode

web:
  secret_key: "jwt_secret"
"""
    secrets_path = temp_dir / "secrets_invalid.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


async def seed_accounts(db: SQLiteAdapter) -> None:
    """두 사용자에게 계좌 2개씩 생성"""
    await db.executemany(
        "INSERT INTO accounts (id, user_id, name) VALUES (?, ?, ?)",
        [
            (ACC_U1_MAIN, USER_1, "Acc principal #1"),
            (ACC_U1_SAVINGS, USER_1, "Acc poupança #1"),
            (ACC_U2_MAIN, USER_2, "Acc principal #2"),
            (ACC_U2_SAVINGS, USER_2, "Acc poupança #2"),
        ],
    )
    await db.commit()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """테스트용 DB 파일 경로"""
    return tmp_path / "ledger_test.db"


@pytest_asyncio.fixture
async def db(db_path: Path) -> SQLiteAdapter:
    """스키마와 기본 계좌가 준비된 임시 DB"""
    adapter = SQLiteAdapter(db_path)
    await adapter.connect()
    await init_schema(adapter)
    await seed_accounts(adapter)

    yield adapter

    await adapter.close()

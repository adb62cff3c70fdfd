"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    JWT_ALGORITHM: str = "HS256"

    LOG_LEVEL: str = "INFO"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"

    # 설정 파일
    SECRETS_FILE: Path = CONFIG_DIR / "secrets.yaml"

    # DB 파일
    PROD_DB: Path = DATA_DIR / "ledger_prod.db"
    TEST_DB: Path = DATA_DIR / "ledger_test.db"


class Messages:
    """사용자 노출 메시지 (API 응답에 그대로 전달되는 고정 문구)"""

    # 권한
    FORBIDDEN: str = "Não autorizado"
    STORE_FAILURE: str = "Erro interno ao acessar o banco de dados"

    # 계좌
    ACCOUNT_NAME_REQUIRED: str = "Nome é um atributo obrigatório"
    ACCOUNT_NAME_DUPLICATED: str = "Já existe uma conta com esse nome"
    ACCOUNT_HAS_TRANSACTIONS: str = "Essa conta possui transações associadas"

    # 거래
    DESCRIPTION_REQUIRED: str = "Descrição é um atributo obrigatório"
    TRANSACTION_DATE_REQUIRED: str = "Data é um atributo obrigatório"
    TRANSACTION_AMOUNT_REQUIRED: str = "Valor é um atributo obrigatório"
    TRANSACTION_TYPE_REQUIRED: str = "Tipo é um atributo obrigatório"
    TRANSACTION_ACCOUNT_REQUIRED: str = "ID da conta é um atributo obrigatório"
    TRANSACTION_TYPE_INVALID: str = "Tipo inválido"
    TRANSACTION_OWNED_BY_TRANSFER: str = (
        "Transação de transferência só pode ser alterada pela transferência"
    )

    # 이체
    TRANSFER_AMOUNT_REQUIRED: str = "Valor da transferência é um atributo obrigatório"
    TRANSFER_DATE_REQUIRED: str = "Data da transferência é um atributo obrigatório"
    TRANSFER_ORIGIN_REQUIRED: str = "ID da conta de origem é um atributo obrigatório"
    TRANSFER_DESTINY_REQUIRED: str = "ID da conta destino é um atributo obrigatório"
    TRANSFER_SAME_ACCOUNT: str = "Não é possível transferir para a mesma conta"
    TRANSFER_ACCOUNT_NOT_OWNED: str = "Conta não pertence ao usuário"


class TransferDescriptions:
    """이체가 생성하는 거래의 설명 형식"""

    OUTGOING: str = "Transfer from origin acc {acc_id}"
    INCOMING: str = "Transfer to destiny acc {acc_id}"

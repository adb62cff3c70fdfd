"""
FastAPI 애플리케이션

라우터 등록, Ledger 예외 → HTTP 응답 변환, 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config.loader import get_settings
from core.errors import LedgerError, StoreError
from core.logging import setup_logging

# 로깅 설정 (콘솔 + 파일)
setup_logging("web")

from web.routes import (  # noqa: E402
    accounts,
    balance,
    health,
    transactions,
    transfers,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리"""
    from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema

    settings = get_settings()

    # 시작 시 - DB 스키마 자동 초기화
    async with SQLiteAdapter(settings.db_path) as db:
        await init_schema(db)

    logger.info(f"Web 시작: mode={settings.mode.value}, db={settings.db_path}")

    yield


app = FastAPI(
    title="Ledger API",
    description="개인 가계부 API (계좌, 거래, 계좌 간 이체, 잔액)",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS 설정 (개발용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================================================================
# 예외 처리
# =========================================================================


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """Ledger 예외를 {"error": message} 응답으로 변환"""
    if isinstance(exc, StoreError):
        logger.error(f"Store failure on {request.method} {request.url.path}: {exc.__cause__}")
    else:
        logger.info(
            f"{request.method} {request.url.path} rejected: {exc.message}",
            extra={"status_code": exc.status_code},
        )

    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(balance.router)
app.include_router(accounts.router)
app.include_router(transactions.router)
app.include_router(transfers.router)


@app.get("/", include_in_schema=False)
async def home():
    """루트 (응답 본문 없음)"""
    return JSONResponse(status_code=200, content=None)

"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
"""

import logging
from dataclasses import dataclass
from typing import AsyncGenerator

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings, get_settings
from core.constants import Defaults

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


async def get_db(
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[SQLiteAdapter, None]:
    """DB 세션 반환 (읽기 전용)

    잔액/목록 조회 등 읽기 작업용.
    """
    async with SQLiteAdapter(settings.db_path, readonly=True) as db:
        yield db


async def get_db_write(
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[SQLiteAdapter, None]:
    """DB 세션 반환 (쓰기 가능)

    계좌/거래/이체 생성, 수정, 삭제 시 사용.
    """
    async with SQLiteAdapter(settings.db_path, readonly=False) as db:
        yield db


# =========================================================================
# 인증 (토큰 발급은 외부, 여기서는 검증만)
# =========================================================================


@dataclass(frozen=True)
class CurrentUser:
    """인증된 요청 사용자"""

    id: int


def decode_user_token(token: str, secret_key: str) -> CurrentUser:
    """JWT에서 사용자 ID 추출

    Args:
        token: Bearer 토큰
        secret_key: 서명 검증 키

    Returns:
        CurrentUser

    Raises:
        HTTPException: 서명/형식이 잘못되었거나 id 클레임이 없는 경우 401
    """
    try:
        payload = jwt.decode(token, secret_key, algorithms=[Defaults.JWT_ALGORITHM])
        return CurrentUser(id=int(payload["id"]))
    except (jwt.InvalidTokenError, KeyError, TypeError, ValueError) as e:
        logger.warning(f"Invalid token: {e}")
        raise HTTPException(status_code=401, detail="Unauthorized") from e


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_app_settings),
) -> CurrentUser:
    """요청 사용자 반환 (Authorization: bearer <jwt>)"""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return decode_user_token(credentials.credentials, settings.web_secret_key)

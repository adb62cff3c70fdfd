"""
타임존 유틸리티

내부 저장: UTC 원칙 준수를 위한 헬퍼 함수.
DB에는 마이크로초까지 포함한 ISO 8601 UTC 문자열로 저장하므로
문자열 비교만으로 시간 순서 비교가 가능하다.
"""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)

    datetime.now(timezone.utc)의 축약형.

    Returns:
        현재 UTC 시간 (tzinfo=timezone.utc)
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """datetime을 UTC로 정규화

    Args:
        dt: datetime 객체 (naive면 UTC로 간주)

    Returns:
        UTC 타임존의 datetime
    """
    if dt.tzinfo is None:
        # naive datetime은 UTC로 간주
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_db_ts(dt: datetime) -> str:
    """DB 저장용 타임스탬프 문자열

    Example:
        >>> to_db_ts(datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc))
        '2026-10-19T12:00:00.000000+00:00'
    """
    return ensure_utc(dt).isoformat(timespec="microseconds")


def from_db_ts(value: str) -> datetime:
    """DB 타임스탬프 문자열을 UTC datetime으로 변환"""
    return ensure_utc(datetime.fromisoformat(value))

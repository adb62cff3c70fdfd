"""
유틸리티 패키지

타임존 처리, 금액 변환 등 공통 유틸리티
"""

from core.utils.money import CENT, format_money, to_money
from core.utils.timezone import (
    ensure_utc,
    from_db_ts,
    now_utc,
    to_db_ts,
)

__all__ = [
    "CENT",
    "format_money",
    "to_money",
    "ensure_utc",
    "from_db_ts",
    "now_utc",
    "to_db_ts",
]

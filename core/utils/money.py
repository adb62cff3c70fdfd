"""
금액 유틸리티

모든 금액은 Decimal로 다루며 소수점 2자리 고정 문자열로 저장/노출한다.
float 연산은 사용하지 않는다.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

CENT = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    """임의 입력을 소수점 2자리 Decimal로 변환

    float는 str()을 거쳐 변환하여 이진 부동소수점 오차를 피한다.

    Raises:
        ValueError: 숫자로 해석할 수 없거나 표현 범위를 넘는 경우
    """
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except InvalidOperation as e:
            raise ValueError(f"Invalid amount: {value!r}") from e

    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")

    try:
        amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        # 28자리 정밀도를 넘는 금액
        raise ValueError(f"Amount out of range: {value!r}") from e
    if amount.is_zero():
        # "-0.00" 방지
        amount = amount.copy_abs()
    return amount


def format_money(value: Any) -> str:
    """소수점 2자리 문자열 (예: "100.00", "-100.00")"""
    return f"{to_money(value):.2f}"

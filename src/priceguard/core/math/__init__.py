"""
Core math modules для priceguard

Целочисленные примитивы фиксированной разрядности, конверсии десятичных
масштабов и консервативные границы цены.
"""

# Numerical Safeguards
from priceguard.core.math.numerical_safeguards import (
    # Разрядности
    BPS_DENOMINATOR,
    I32_MAX,
    I32_MIN,
    I64_MAX,
    I64_MIN,
    I128_MAX,
    I128_MIN,
    U64_MAX,
    U128_MAX,
    # Насыщение и сужение
    checked_narrow,
    checked_wide,
    saturate,
    saturating_add,
    saturating_sub,
    to_i64,
    to_u64,
    # Деление
    div_trunc,
)

# SafeMath
from priceguard.core.math.safe_math import (
    DEFAULT_VALUE_DECIMALS,
    MAX_DECIMALS,
    MAX_POW10_EXPONENT,
    confidence_ratio_bps,
    format_usd,
    pow10,
    price_ratio,
    rebase,
    to_decimal,
    tokens_for_value,
    value_for_tokens,
    weighted_blend,
)

# SafePrice
from priceguard.core.math.safe_price import SafePrice

__all__ = [
    # Numerical Safeguards — разрядности
    "BPS_DENOMINATOR",
    "I32_MAX",
    "I32_MIN",
    "I64_MAX",
    "I64_MIN",
    "I128_MAX",
    "I128_MIN",
    "U64_MAX",
    "U128_MAX",
    # Numerical Safeguards — насыщение и сужение
    "checked_narrow",
    "checked_wide",
    "saturate",
    "saturating_add",
    "saturating_sub",
    "to_i64",
    "to_u64",
    "div_trunc",
    # SafeMath — константы
    "DEFAULT_VALUE_DECIMALS",
    "MAX_DECIMALS",
    "MAX_POW10_EXPONENT",
    # SafeMath — функции
    "confidence_ratio_bps",
    "format_usd",
    "pow10",
    "price_ratio",
    "rebase",
    "to_decimal",
    "tokens_for_value",
    "value_for_tokens",
    "weighted_blend",
    # SafePrice
    "SafePrice",
]

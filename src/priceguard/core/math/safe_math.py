"""
SafeMath — конверсия между десятичными масштабами с фиксированной точкой

Единственный допустимый способ преобразований между:
- количеством токена (amount с amount_decimals знаками)
- ценой оракула (price × 10^exponent)
- стоимостью в целевых единицах (output_decimals знаков, обычно USD/6)

ЗАПРЕЩЕНО смешивать масштабы без явного конвертера из этого модуля.

Правила:
1. Все умножения выполняются в широком типе (u128/i128) ДО деления
2. Деление выполняется один раз и последним, округление к нулю
3. Сужение результата до u64/i64 проверяется (Overflow), никогда не усекается
4. 10^n для n > 38 не помещается в u128 → Overflow

ФОРМУЛЫ:
    value  = amount × price × 10^(output_decimals − amount_decimals + exponent)
    tokens = value × 10^(token_decimals − value_decimals − exponent) / price
    ratio  = num × 10^(result_decimals + num_exponent − den_exponent) / den
    blend  = (p1 × w + p2 × (10000 − w)) / 10000
"""

from decimal import Decimal
from typing import Final

from priceguard.core.errors import (
    InvalidWeight,
    NegativePrice,
    NonPositivePrice,
    Overflow,
)
from priceguard.core.math.numerical_safeguards import (
    BPS_DENOMINATOR,
    U64_MAX,
    checked_wide,
    div_trunc,
    to_i64,
    to_u64,
    validate_in_range,
    validate_non_negative,
)

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Максимальная степень десяти, помещающаяся в u128 (10^38 < 2^128 < 10^39)
MAX_POW10_EXPONENT: Final[int] = 38

# Масштаб стоимости по умолчанию (USD с 6 знаками, как у USDC)
DEFAULT_VALUE_DECIMALS: Final[int] = 6

# Предел количества десятичных знаков токена/результата (u8)
MAX_DECIMALS: Final[int] = 255


# =============================================================================
# СТЕПЕНИ ДЕСЯТИ И REBASE
# =============================================================================


def pow10(n: int) -> int:
    """
    10^n в пределах u128.

    Args:
        n: Неотрицательный показатель

    Returns:
        10^n

    Raises:
        ValueError: Если n < 0
        Overflow: Если n > MAX_POW10_EXPONENT

    Examples:
        >>> pow10(8)
        100000000
    """
    validate_non_negative(n, "power of ten exponent")
    if n > MAX_POW10_EXPONENT:
        raise Overflow(f"10^{n} exceeds 128-bit range")
    return 10**n


def rebase(value: int, adjustment: int, signed: bool = False) -> int:
    """
    Сдвиг десятичного масштаба значения на adjustment знаков.

    adjustment >= 0: value × 10^adjustment
    adjustment < 0:  value / 10^(−adjustment), округление к нулю

    Args:
        value: Значение в широком типе
        adjustment: Сдвиг масштаба (может быть отрицательным)
        signed: i128 (True) или u128 (False) для промежуточного значения

    Returns:
        Пересчитанное значение (ещё не суженное)

    Raises:
        Overflow: Если степень десяти или промежуточное значение
            не помещаются в 128 бит
    """
    checked_wide(value, signed, "rebase input")

    if adjustment >= 0:
        return checked_wide(value * pow10(adjustment), signed, "rebased value")

    return div_trunc(value, pow10(-adjustment))


def _validate_decimals(decimals: int, name: str) -> None:
    validate_in_range(decimals, name, 0, MAX_DECIMALS)


# =============================================================================
# КОНВЕРСИИ AMOUNT ↔ VALUE
# =============================================================================


def value_for_tokens(
    amount: int,
    amount_decimals: int,
    price: int,
    exponent: int,
    output_decimals: int = DEFAULT_VALUE_DECIMALS,
) -> int:
    """
    Стоимость amount токенов по цене price × 10^exponent.

    value = amount × price × 10^(output_decimals − amount_decimals + exponent)

    Args:
        amount: Количество токена (u64, в минимальных единицах)
        amount_decimals: Десятичные знаки токена
        price: Цена оракула (должна быть > 0)
        exponent: Показатель цены
        output_decimals: Десятичные знаки результата (default: 6)

    Returns:
        Стоимость в output_decimals знаках (u64)

    Raises:
        NonPositivePrice: Если price <= 0
        Overflow: Если результат не помещается в u64
        ValueError: Если amount или decimals вне допустимых диапазонов

    Examples:
        >>> value_for_tokens(1_000_000, 6, 2_500_000_000, -8, 6)
        25000000
    """
    validate_in_range(amount, "amount", 0, U64_MAX)
    _validate_decimals(amount_decimals, "amount_decimals")
    _validate_decimals(output_decimals, "output_decimals")

    if price <= 0:
        raise NonPositivePrice(f"price must be positive for value conversion, got {price}")

    product = checked_wide(amount * price, signed=False, what="amount × price")
    adjustment = output_decimals - amount_decimals + exponent

    return to_u64(rebase(product, adjustment), "value")


def tokens_for_value(
    value: int,
    value_decimals: int,
    price: int,
    exponent: int,
    token_decimals: int,
) -> int:
    """
    Количество токенов, которое можно получить за value по цене price × 10^exponent.

    tokens = value × 10^(token_decimals − value_decimals − exponent) / price

    При отрицательном сдвиге степень десяти переносится в знаменатель,
    чтобы деление было единственным и последним.

    Args:
        value: Стоимость (u64) в value_decimals знаках
        value_decimals: Десятичные знаки стоимости
        price: Цена оракула (должна быть > 0)
        exponent: Показатель цены
        token_decimals: Десятичные знаки токена

    Returns:
        Количество токена в минимальных единицах (u64)

    Raises:
        NonPositivePrice: Если price <= 0
        Overflow: Если результат или промежуточное значение вне диапазона
    """
    validate_in_range(value, "value", 0, U64_MAX)
    _validate_decimals(value_decimals, "value_decimals")
    _validate_decimals(token_decimals, "token_decimals")

    if price <= 0:
        raise NonPositivePrice(f"price must be positive for token conversion, got {price}")

    adjustment = token_decimals - value_decimals - exponent

    if adjustment >= 0:
        numerator = checked_wide(value * pow10(adjustment), signed=False, what="scaled value")
        denominator = price
    else:
        numerator = value
        denominator = checked_wide(price * pow10(-adjustment), signed=False, what="scaled price")

    return to_u64(div_trunc(numerator, denominator), "tokens")


# =============================================================================
# RATIO И BLEND
# =============================================================================


def price_ratio(
    num_price: int,
    num_exponent: int,
    den_price: int,
    den_exponent: int,
    result_decimals: int,
) -> int:
    """
    Отношение двух цен (например, ETH/BTC из ETH/USD и BTC/USD).

    Порядок: выравнивание показателей, масштабирование до result_decimals,
    затем одно деление.

    Returns:
        num / den в result_decimals знаках (u64)

    Raises:
        NonPositivePrice: Если den_price <= 0
        NegativePrice: Если отношение отрицательно
        Overflow: Если результат или промежуточное значение вне диапазона

    Examples:
        >>> price_ratio(300_000_000_000, -8, 6_000_000_000_000, -8, 6)
        50000
    """
    _validate_decimals(result_decimals, "result_decimals")

    if den_price <= 0:
        raise NonPositivePrice(f"denominator price must be positive, got {den_price}")

    shift = result_decimals + num_exponent - den_exponent

    if shift >= 0:
        numerator = checked_wide(num_price * pow10(shift), signed=True, what="scaled numerator")
        ratio = div_trunc(numerator, den_price)
    else:
        denominator = checked_wide(den_price * pow10(-shift), signed=True, what="scaled denominator")
        ratio = div_trunc(num_price, denominator)

    if ratio < 0:
        raise NegativePrice(f"price ratio is negative: {ratio}")

    return to_u64(ratio, "ratio")


def weighted_blend(p1: int, p2: int, weight_bps: int) -> int:
    """
    Взвешенное среднее двух цен одного масштаба.

    blend = (p1 × w + p2 × (10000 − w)) / 10000, округление к нулю

    Args:
        p1: Первая цена (например, spot)
        p2: Вторая цена (например, EMA)
        weight_bps: Вес p1 в basis points [0, 10000]

    Returns:
        Взвешенная цена (i64)

    Raises:
        InvalidWeight: Если weight_bps вне [0, 10000]
    """
    if not 0 <= weight_bps <= BPS_DENOMINATOR:
        raise InvalidWeight(f"weight_bps must be in [0, {BPS_DENOMINATOR}], got {weight_bps}")

    weighted = checked_wide(
        p1 * weight_bps + p2 * (BPS_DENOMINATOR - weight_bps),
        signed=True,
        what="weighted sum",
    )
    return to_i64(div_trunc(weighted, BPS_DENOMINATOR), "blended price")


def confidence_ratio_bps(price: int, confidence: int) -> int:
    """
    Отношение confidence к |price| в basis points.

    При price == 0 возвращается максимум u64 (гарантированный отказ),
    а не ошибка деления. Результат насыщается на U64_MAX.

    Examples:
        >>> confidence_ratio_bps(10_000_000, 50_000)
        50
        >>> confidence_ratio_bps(0, 1) == U64_MAX
        True
    """
    if price == 0:
        return U64_MAX

    ratio = confidence * BPS_DENOMINATOR // abs(price)
    return min(ratio, U64_MAX)


# =============================================================================
# ПРЕДСТАВЛЕНИЕ
# =============================================================================


def to_decimal(price: int, exponent: int) -> Decimal:
    """
    Точное десятичное значение price × 10^exponent.

    Examples:
        >>> to_decimal(10_000_000, -8)
        Decimal('0.10000000')
    """
    return Decimal(price).scaleb(exponent)


def format_usd(value: Decimal) -> str:
    """
    Форматирование стоимости в USD для отображения.

    |value| >= 1: два знака и разделитель тысяч ($1,234.56)
    |value| < 1:  восемь знаков ($0.00012345)
    """
    sign = "-" if value < 0 else ""
    magnitude = abs(value)

    if magnitude >= 1:
        return f"{sign}${magnitude:,.2f}"
    return f"{sign}${magnitude:.8f}"

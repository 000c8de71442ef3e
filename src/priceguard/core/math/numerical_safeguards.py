"""
Numerical Safeguards — целочисленные примитивы фиксированной разрядности

Python int не переполняется, поэтому границы разрядностей проверяются явно.
Модуль задаёт две разные политики переполнения:
- Насыщающая арифметика (saturating_add/saturating_sub) для границ цены:
  вычисление безопасных границ никогда не падает, значение прижимается
  к пределу типа.
- Проверяемое сужение (checked_narrow) для конверсий единиц: финансово
  значимое значение никогда не усекается молча, вместо этого Overflow.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. saturating_* всегда возвращает значение в пределах разрядности
2. checked_narrow либо возвращает значение без изменений, либо Overflow
3. div_trunc округляет к нулю (как целочисленное деление фиксированной ширины)
4. Все операции детерминированы и не имеют состояния
"""

from typing import Final, Optional

from priceguard.core.errors import DivisionByZero, Overflow

# =============================================================================
# РАЗРЯДНОСТИ
# =============================================================================

I32_MIN: Final[int] = -(2**31)
I32_MAX: Final[int] = 2**31 - 1

I64_MIN: Final[int] = -(2**63)
I64_MAX: Final[int] = 2**63 - 1

U64_MAX: Final[int] = 2**64 - 1

# Широкие промежуточные типы для умножения до деления
I128_MIN: Final[int] = -(2**127)
I128_MAX: Final[int] = 2**127 - 1

U128_MAX: Final[int] = 2**128 - 1

# Знаменатель basis points
BPS_DENOMINATOR: Final[int] = 10_000


# =============================================================================
# НАСЫЩАЮЩАЯ АРИФМЕТИКА
# =============================================================================


def saturate(value: int, min_value: int = I64_MIN, max_value: int = I64_MAX) -> int:
    """
    Прижатие значения к пределам разрядности.

    Examples:
        >>> saturate(2**70)
        9223372036854775807
        >>> saturate(-5)
        -5
    """
    if value < min_value:
        return min_value
    if value > max_value:
        return max_value
    return value


def saturating_add(a: int, b: int, min_value: int = I64_MIN, max_value: int = I64_MAX) -> int:
    """
    Сложение с насыщением (по умолчанию i64).

    Args:
        a: Первое слагаемое
        b: Второе слагаемое
        min_value: Нижний предел разрядности
        max_value: Верхний предел разрядности

    Returns:
        a + b, прижатое к [min_value, max_value]
    """
    return saturate(a + b, min_value, max_value)


def saturating_sub(a: int, b: int, min_value: int = I64_MIN, max_value: int = I64_MAX) -> int:
    """
    Вычитание с насыщением (по умолчанию i64).

    Returns:
        a - b, прижатое к [min_value, max_value]
    """
    return saturate(a - b, min_value, max_value)


# =============================================================================
# ПРОВЕРЯЕМОЕ СУЖЕНИЕ
# =============================================================================


def fits(value: int, min_value: int, max_value: int) -> bool:
    """Помещается ли значение в диапазон разрядности"""
    return min_value <= value <= max_value


def checked_narrow(value: int, min_value: int, max_value: int, what: str = "value") -> int:
    """
    Сужение значения до разрядности с проверкой.

    Args:
        value: Значение после широких вычислений
        min_value: Нижний предел целевой разрядности
        max_value: Верхний предел целевой разрядности
        what: Имя величины для сообщения об ошибке

    Returns:
        value без изменений

    Raises:
        Overflow: Если значение не помещается в разрядность
    """
    if not fits(value, min_value, max_value):
        raise Overflow(f"{what} {value} out of range [{min_value}, {max_value}]")
    return value


def to_u64(value: int, what: str = "value") -> int:
    return checked_narrow(value, 0, U64_MAX, what)


def to_i64(value: int, what: str = "value") -> int:
    return checked_narrow(value, I64_MIN, I64_MAX, what)


def checked_wide(value: int, signed: bool, what: str = "intermediate") -> int:
    """Проверка, что промежуточное значение помещается в i128/u128"""
    if signed:
        return checked_narrow(value, I128_MIN, I128_MAX, what)
    return checked_narrow(value, 0, U128_MAX, what)


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def div_trunc(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с округлением к нулю.

    Оператор // в Python округляет к минус бесконечности; здесь нужно
    поведение целочисленного деления фиксированной ширины.

    Raises:
        DivisionByZero: Если denominator == 0

    Examples:
        >>> div_trunc(7, 2)
        3
        >>> div_trunc(-7, 2)
        -3
    """
    if denominator == 0:
        raise DivisionByZero(f"division of {numerator} by zero")

    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


# =============================================================================
# ВАЛИДАЦИЯ ПРЕДУСЛОВИЙ
# =============================================================================


def validate_non_negative(value: int, name: str) -> None:
    """
    Валидация, что значение неотрицательное.

    Raises:
        ValueError: Если value < 0
    """
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_in_range(
    value: int,
    name: str,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> None:
    """
    Валидация, что значение в заданном диапазоне.

    Raises:
        ValueError: Если value вне диапазона
    """
    if min_value is not None and value < min_value:
        raise ValueError(f"{name} must be >= {min_value}, got {value}")

    if max_value is not None and value > max_value:
        raise ValueError(f"{name} must be <= {max_value}, got {value}")

"""
Errors — типизированные отказы валидации и арифметики цен

Все отказы локальны и восстановимы: вызывающий код решает, что делать
с устаревшей ценой или слишком широким доверительным интервалом.
Повторных попыток ядро не делает.

Каждое исключение несёт ErrorKind, значение которого используется как
reject_reason в результатах валидатора.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Вид отказа"""

    STALE_PRICE = "stale_price"
    FEED_MISMATCH = "feed_mismatch"
    CONFIDENCE_TOO_HIGH = "confidence_too_high"
    PRICE_BELOW_MINIMUM = "price_below_minimum"
    PRICE_ABOVE_MAXIMUM = "price_above_maximum"
    NEGATIVE_PRICE = "negative_price"
    NON_POSITIVE_PRICE = "non_positive_price"
    FEEDS_NOT_SYNCHRONIZED = "feeds_not_synchronized"
    OVERFLOW = "overflow"
    INVALID_FEED_IDENTIFIER = "invalid_feed_identifier"
    INVALID_WEIGHT = "invalid_weight"
    DIVISION_BY_ZERO = "division_by_zero"


class PriceGuardError(Exception):
    """
    Базовый класс всех отказов priceguard.

    Attributes:
        kind: Вид отказа (ErrorKind)
    """

    kind: ErrorKind

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind.value)
        self.message = message or self.kind.value


class StalePrice(PriceGuardError):
    """Цена старше max_age_seconds или опубликована «в будущем»"""

    kind = ErrorKind.STALE_PRICE


class FeedMismatch(PriceGuardError):
    """Идентификатор фида не совпадает с ожидаемым"""

    kind = ErrorKind.FEED_MISMATCH


class ConfidenceTooHigh(PriceGuardError):
    """Отношение confidence/price превышает порог политики"""

    kind = ErrorKind.CONFIDENCE_TOO_HIGH


class PriceBelowMinimum(PriceGuardError):
    kind = ErrorKind.PRICE_BELOW_MINIMUM


class PriceAboveMaximum(PriceGuardError):
    kind = ErrorKind.PRICE_ABOVE_MAXIMUM


class NegativePrice(PriceGuardError):
    """Значение, которое должно быть неотрицательным, отрицательно"""

    kind = ErrorKind.NEGATIVE_PRICE


class NonPositivePrice(PriceGuardError):
    """Цена в знаменателе (или база конверсии) <= 0"""

    kind = ErrorKind.NON_POSITIVE_PRICE


class FeedsNotSynchronized(PriceGuardError):
    """Время публикации двух фидов расходится больше допуска"""

    kind = ErrorKind.FEEDS_NOT_SYNCHRONIZED


class Overflow(PriceGuardError):
    """
    Результат не помещается в целевую разрядность.

    Возникает при сужении результата (u64/i64) или при вычислении
    степени десяти, не помещающейся в 128 бит.
    """

    kind = ErrorKind.OVERFLOW


class InvalidFeedIdentifier(PriceGuardError):
    """Некорректное текстовое представление feed id"""

    kind = ErrorKind.INVALID_FEED_IDENTIFIER


class InvalidWeight(PriceGuardError):
    """Вес в basis points вне диапазона [0, 10000]"""

    kind = ErrorKind.INVALID_WEIGHT


class DivisionByZero(PriceGuardError):
    kind = ErrorKind.DIVISION_BY_ZERO

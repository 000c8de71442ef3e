"""
priceguard — валидация цен оракула и безопасная десятичная арифметика.

Чистая библиотека без состояния: принимает сырой сэмпл оракула и доверенное
текущее время, возвращает провалидированную цену или типизированный отказ.
"""

import logging

from priceguard.core.domain import (
    FeedIdentifier,
    PriceSample,
    ValidatedPrice,
    ValidationPolicy,
    feed_id_for,
)
from priceguard.core.errors import ErrorKind, PriceGuardError
from priceguard.core.math import SafePrice
from priceguard.validator import PriceValidator, PriceValidationResult, validate_price

# Библиотека не выводит логи сама: представление решает приложение
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "ErrorKind",
    "FeedIdentifier",
    "PriceGuardError",
    "PriceSample",
    "PriceValidationResult",
    "PriceValidator",
    "SafePrice",
    "ValidatedPrice",
    "ValidationPolicy",
    "feed_id_for",
    "validate_price",
]

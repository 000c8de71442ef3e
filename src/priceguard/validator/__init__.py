"""Validator — проверка сэмплов оракула по политике.

- Фиксированный порядок проверок: возраст → фид → confidence → clamp
- Без состояния между вызовами
- Отказы типизированы (priceguard.core.errors)
"""

from .price_validator import (
    PriceValidationResult,
    PriceValidator,
    ValidationStage,
    validate_price,
)

__all__ = [
    "PriceValidator",
    "PriceValidationResult",
    "ValidationStage",
    "validate_price",
]

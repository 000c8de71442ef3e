"""
Contract Validation Module

Модуль для валидации и разбора JSON контрактов оракула.
"""

from .validators import (
    ContractValidator,
    PriceUpdate,
    PriceUpdateValidator,
    SchemaLoader,
    parse_price_update,
    validate_price_update,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PriceUpdateValidator",
    "PriceUpdate",
    # Functions
    "validate_price_update",
    "parse_price_update",
]

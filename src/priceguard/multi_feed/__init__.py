"""
Multi-Feed Operations — синхронизация, отношения и смешивание нескольких фидов.
"""

from priceguard.multi_feed.operations import (
    PricePoint,
    blend,
    check_synchronized,
    convert_amount,
    price_ratio,
)

__all__ = [
    "PricePoint",
    "blend",
    "check_synchronized",
    "convert_amount",
    "price_ratio",
]

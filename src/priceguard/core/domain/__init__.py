"""
Domain models and value objects.

Contains price samples, validated prices, validation policies and feed ids.
"""

from priceguard.core.domain.feed_id import (
    FEED_ID_LENGTH,
    KNOWN_FEEDS,
    FeedIdentifier,
    feed_id_for,
)
from priceguard.core.domain.policy import ValidationPolicy
from priceguard.core.domain.price import PriceSample, ValidatedPrice

__all__ = [
    # Feed id
    "FEED_ID_LENGTH",
    "KNOWN_FEEDS",
    "FeedIdentifier",
    "feed_id_for",
    # Policy
    "ValidationPolicy",
    # Price
    "PriceSample",
    "ValidatedPrice",
]

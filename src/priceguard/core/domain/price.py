"""
PriceSample / ValidatedPrice — модели цены оракула

Immutable Pydantic модели:
- PriceSample: сырое наблюдение оракула (price × 10^exponent ± confidence)
- ValidatedPrice: сэмпл, прошедший валидацию, с насыщающими границами

PriceSample производит внешний клиент оракула, ValidatedPrice — только
валидатор. Ядро их не кэширует и не изменяет.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from priceguard.core.domain.feed_id import FeedIdentifier
from priceguard.core.errors import NonPositivePrice
from priceguard.core.math.numerical_safeguards import (
    I32_MAX,
    I32_MIN,
    I64_MAX,
    I64_MIN,
    U64_MAX,
)
from priceguard.core.math.safe_math import (
    DEFAULT_VALUE_DECIMALS,
    to_decimal,
    value_for_tokens,
)
from priceguard.core.math.safe_price import SafePrice


# =============================================================================
# PRICE SAMPLE
# =============================================================================


class PriceSample(BaseModel):
    """
    Сырое наблюдение цены.

    Истинное значение: price × 10^exponent, неопределённость ± confidence
    в том же масштабе. publish_time — секунды в домене часов вызывающего.
    """

    price: int = Field(..., ge=I64_MIN, le=I64_MAX, description="Цена (i64, может быть <= 0)")
    confidence: int = Field(..., ge=0, le=U64_MAX, description="Доверительный интервал (u64)")
    exponent: int = Field(..., ge=I32_MIN, le=I32_MAX, description="Десятичный показатель")
    publish_time: int = Field(
        ..., ge=I64_MIN, le=I64_MAX, description="Время публикации (секунды)"
    )

    model_config = {"frozen": True}

    def to_decimal(self) -> Decimal:
        """Истинное значение цены"""
        return to_decimal(self.price, self.exponent)

    def confidence_to_decimal(self) -> Decimal:
        return to_decimal(self.confidence, self.exponent)

    @property
    def confidence_pct(self) -> Optional[Decimal]:
        """confidence / |price| × 100; None при нулевой цене"""
        if self.price == 0:
            return None
        return Decimal(self.confidence) * 100 / abs(Decimal(self.price))

    def age(self, now: int) -> int:
        """Возраст сэмпла относительно now (может быть отрицательным)"""
        return now - self.publish_time

    def safe_price(self) -> SafePrice:
        return SafePrice.from_sample(self)


# =============================================================================
# VALIDATED PRICE
# =============================================================================


class ValidatedPrice(BaseModel):
    """
    Цена, прошедшая политику валидации.

    Инвариант: lower_bound <= price <= upper_bound, границы равны
    насыщающим price ∓ confidence.
    """

    price: int = Field(..., ge=I64_MIN, le=I64_MAX)
    confidence: int = Field(..., ge=0, le=U64_MAX)
    exponent: int = Field(..., ge=I32_MIN, le=I32_MAX)
    publish_time: int = Field(..., ge=I64_MIN, le=I64_MAX)
    lower_bound: int = Field(..., ge=I64_MIN, le=I64_MAX)
    upper_bound: int = Field(..., ge=I64_MIN, le=I64_MAX)
    feed_id: Optional[FeedIdentifier] = Field(
        None, description="Идентификатор фида, если был передан при валидации"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_bounds(self) -> "ValidatedPrice":
        """Границы должны совпадать с насыщающей деривацией"""
        expected = SafePrice.from_components(self.price, self.confidence, self.exponent)
        if (self.lower_bound, self.upper_bound) != (expected.lower, expected.upper):
            raise ValueError(
                f"bounds [{self.lower_bound}, {self.upper_bound}] do not match "
                f"price {self.price} ± {self.confidence}"
            )
        return self

    @classmethod
    def from_sample(
        cls, sample: PriceSample, feed_id: Optional[FeedIdentifier] = None
    ) -> "ValidatedPrice":
        """Сборка результата из сэмпла (вызывается валидатором)"""
        safe = SafePrice.from_sample(sample)
        return cls(
            price=sample.price,
            confidence=sample.confidence,
            exponent=sample.exponent,
            publish_time=sample.publish_time,
            lower_bound=safe.lower,
            upper_bound=safe.upper,
            feed_id=feed_id,
        )

    def safe_price(self) -> SafePrice:
        return SafePrice(
            lower=self.lower_bound,
            mid=self.price,
            upper=self.upper_bound,
            exponent=self.exponent,
        )

    def sell_price(self) -> int:
        return self.lower_bound

    def buy_price(self) -> int:
        return self.upper_bound

    def price_with_sigma(self, sigma: int) -> SafePrice:
        return self.safe_price().price_with_sigma(sigma)

    def to_decimal(self) -> Decimal:
        return to_decimal(self.price, self.exponent)

    def value_of(
        self,
        amount: int,
        amount_decimals: int,
        output_decimals: int = DEFAULT_VALUE_DECIMALS,
    ) -> int:
        """Стоимость amount токенов по mid-цене"""
        return value_for_tokens(amount, amount_decimals, self.price, self.exponent, output_decimals)

    def conservative_value(
        self,
        amount: int,
        amount_decimals: int,
        sigma: int = 2,
        output_decimals: int = DEFAULT_VALUE_DECIMALS,
    ) -> int:
        """
        Консервативная стоимость (например, залога) по нижней n-sigma границе.

        Raises:
            NonPositivePrice: Если нижняя граница <= 0
        """
        lower = self.price_with_sigma(sigma).lower
        if lower <= 0:
            raise NonPositivePrice(
                f"{sigma}-sigma lower bound {lower} is not positive, collateral has no safe value"
            )
        return value_for_tokens(amount, amount_decimals, lower, self.exponent, output_decimals)

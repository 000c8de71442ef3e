"""
SafePrice — консервативные границы цены по доверительному интервалу

Из цены и confidence оракула строятся три значения:
    lower = price − conf   (насыщение i64)
    mid   = price
    upper = price + conf   (насыщение i64)

Консервативные цены:
- sell_price() = lower: актив отдаём, оцениваем дешевле
- buy_price()  = upper: актив получаем, оцениваем дороже

Sigma-масштабирование линейно растягивает полуширину (upper − mid) в n раз.
Это детерминированное преобразование заявленного оракулом интервала,
а не вероятностная оценка.

Границы вычисляются с насыщением и никогда не падают; конверсия в
беззнаковое значение с фиксированной точкой, наоборот, проверяемая.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from priceguard.core.errors import NegativePrice
from priceguard.core.math.numerical_safeguards import (
    saturating_add,
    saturating_sub,
    to_u64,
    validate_in_range,
    validate_non_negative,
)
from priceguard.core.math.safe_math import MAX_DECIMALS, rebase

if TYPE_CHECKING:
    from priceguard.core.domain.price import PriceSample


@dataclass(frozen=True)
class SafePrice:
    """Цена с насыщающими границами доверительного интервала."""

    lower: int
    mid: int
    upper: int
    exponent: int

    @classmethod
    def from_sample(cls, sample: "PriceSample") -> "SafePrice":
        """
        Построение границ из сэмпла оракула.

        lower <= mid <= upper выполняется всегда: confidence неотрицателен,
        а насыщение не допускает wraparound на краях i64.
        """
        return cls.from_components(sample.price, sample.confidence, sample.exponent)

    @classmethod
    def from_components(cls, price: int, confidence: int, exponent: int) -> "SafePrice":
        validate_non_negative(confidence, "confidence")
        return cls(
            lower=saturating_sub(price, confidence),
            mid=price,
            upper=saturating_add(price, confidence),
            exponent=exponent,
        )

    @property
    def half_width(self) -> int:
        return self.upper - self.mid

    def sell_price(self) -> int:
        """Цена для продажи (нижняя граница)"""
        return self.lower

    def buy_price(self) -> int:
        """Цена для покупки (верхняя граница)"""
        return self.upper

    def price_with_sigma(self, sigma: int) -> "SafePrice":
        """
        Границы с полушириной, умноженной на sigma.

        [mid − n × (upper − mid), mid + n × (upper − mid)], насыщение i64.

        Args:
            sigma: Неотрицательный множитель (число «сигм»)

        Returns:
            Новый SafePrice с тем же mid и exponent

        Raises:
            ValueError: Если sigma < 0
        """
        validate_non_negative(sigma, "sigma")
        half_width = self.half_width * sigma
        return SafePrice(
            lower=saturating_sub(self.mid, half_width),
            mid=self.mid,
            upper=saturating_add(self.mid, half_width),
            exponent=self.exponent,
        )

    def to_scaled_unsigned(self, target_decimals: int) -> int:
        """
        mid как беззнаковое число с target_decimals знаками.

        Raises:
            NegativePrice: Если mid < 0
            Overflow: Если результат не помещается в u64
        """
        validate_in_range(target_decimals, "target_decimals", 0, MAX_DECIMALS)

        if self.mid < 0:
            raise NegativePrice(f"cannot scale negative price {self.mid} to unsigned")

        return to_u64(rebase(self.mid, target_decimals + self.exponent), "scaled price")

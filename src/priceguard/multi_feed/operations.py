"""
Multi-Feed Operations — операции над несколькими фидами

- check_synchronized: время публикации двух фидов в пределах допуска
- price_ratio: A/B из двух USD-котировок (например, ETH/BTC)
- blend: взвешенное среднее spot и сглаженной (EMA) цены
- convert_amount: котировка обмена A → B по консервативным границам

Сэмплы считаются уже независимо провалидированными вызывающим кодом:
валидатор здесь повторно не вызывается.
"""

from typing import Union

from priceguard.core.domain.price import PriceSample, ValidatedPrice
from priceguard.core.errors import FeedsNotSynchronized
from priceguard.core.math import safe_math
from priceguard.core.math.numerical_safeguards import to_i64, validate_non_negative

PricePoint = Union[PriceSample, ValidatedPrice]


def check_synchronized(a: PricePoint, b: PricePoint, max_time_diff_seconds: int) -> None:
    """
    Проверка синхронности двух фидов.

    Args:
        a: Первый сэмпл
        b: Второй сэмпл
        max_time_diff_seconds: Допустимое расхождение publish_time (секунды)

    Raises:
        FeedsNotSynchronized: Если |a.publish_time − b.publish_time| > допуска
        ValueError: Если допуск отрицательный
    """
    validate_non_negative(max_time_diff_seconds, "max_time_diff_seconds")

    time_diff = abs(a.publish_time - b.publish_time)
    if time_diff > max_time_diff_seconds:
        raise FeedsNotSynchronized(
            f"publish times differ by {time_diff}s, max {max_time_diff_seconds}s"
        )


def price_ratio(numerator: PricePoint, denominator: PricePoint, result_decimals: int) -> int:
    """
    numerator.price / denominator.price в result_decimals знаках.

    Raises:
        NonPositivePrice: Если цена знаменателя <= 0
        NegativePrice: Если отношение отрицательно
        Overflow: Если результат не помещается в u64
    """
    return safe_math.price_ratio(
        numerator.price,
        numerator.exponent,
        denominator.price,
        denominator.exponent,
        result_decimals,
    )


def blend(spot: PricePoint, smoothed: PricePoint, spot_weight_bps: int) -> int:
    """
    Взвешенное среднее spot и сглаженной цены (в показателе spot).

    Если показатели различаются, сглаженная цена сначала пересчитывается
    в показатель spot.

    Args:
        spot: Spot-цена
        smoothed: Сглаженная цена (EMA)
        spot_weight_bps: Вес spot в basis points

    Returns:
        Цена в показателе spot.exponent

    Raises:
        InvalidWeight: Если вес вне [0, 10000]
        Overflow: Если пересчёт масштаба выходит за разрядность
    """
    smoothed_price = smoothed.price
    if smoothed.exponent != spot.exponent:
        smoothed_price = to_i64(
            safe_math.rebase(smoothed_price, smoothed.exponent - spot.exponent, signed=True),
            "rebased smoothed price",
        )

    return safe_math.weighted_blend(spot.price, smoothed_price, spot_weight_bps)


def convert_amount(
    amount_in: int,
    in_decimals: int,
    in_price: PricePoint,
    out_decimals: int,
    out_price: PricePoint,
    value_decimals: int = safe_math.DEFAULT_VALUE_DECIMALS,
) -> int:
    """
    Количество токена B, получаемое за amount_in токена A.

    Вход оценивается по нижней границе (продаём A), выход покупается
    по верхней границе (покупаем B).

    Returns:
        Количество токена B в минимальных единицах (u64)

    Raises:
        NonPositivePrice: Если консервативная цена <= 0
        Overflow: Если значение не помещается в u64
    """
    sell = in_price.safe_price().sell_price()
    buy = out_price.safe_price().buy_price()

    value = safe_math.value_for_tokens(
        amount_in, in_decimals, sell, in_price.exponent, value_decimals
    )
    return safe_math.tokens_for_value(
        value, value_decimals, buy, out_price.exponent, out_decimals
    )

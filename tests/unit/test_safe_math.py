"""
Тесты для модуля SafeMath

Проверяет:
1. Степени десяти и rebase (масштаб вверх/вниз, переполнение)
2. Конверсию amount → value и обратно
3. Отношение двух цен с разными показателями
4. Взвешенное смешивание цен
5. Отношение confidence/price в basis points
6. Представление (Decimal, форматирование USD)
"""

from decimal import Decimal

import pytest

from priceguard.core.errors import (
    InvalidWeight,
    NegativePrice,
    NonPositivePrice,
    Overflow,
)
from priceguard.core.math.numerical_safeguards import I64_MAX, U64_MAX
from priceguard.core.math.safe_math import (
    MAX_POW10_EXPONENT,
    confidence_ratio_bps,
    format_usd,
    pow10,
    price_ratio,
    rebase,
    to_decimal,
    tokens_for_value,
    value_for_tokens,
    weighted_blend,
)

# =============================================================================
# POW10 / REBASE
# =============================================================================


class TestPow10:
    """Тесты для pow10"""

    def test_basic_powers(self) -> None:
        assert pow10(0) == 1
        assert pow10(8) == 100_000_000

    def test_max_exponent_allowed(self) -> None:
        """10^38 помещается в u128"""
        assert pow10(MAX_POW10_EXPONENT) == 10**38

    def test_exponent_above_max_overflows(self) -> None:
        """10^39 не помещается в u128 → Overflow"""
        with pytest.raises(Overflow):
            pow10(MAX_POW10_EXPONENT + 1)

    def test_negative_exponent_rejected(self) -> None:
        with pytest.raises(ValueError):
            pow10(-1)


class TestRebase:
    """Тесты для rebase"""

    def test_scale_up(self) -> None:
        assert rebase(5, 3) == 5_000

    def test_scale_down_truncates(self) -> None:
        """Масштаб вниз отбрасывает дробную часть"""
        assert rebase(12_345, -2) == 123
        assert rebase(99, -2) == 0

    def test_signed_scale_down_truncates_toward_zero(self) -> None:
        assert rebase(-12_345, -2, signed=True) == -123

    def test_negative_value_unsigned_rejected(self) -> None:
        with pytest.raises(Overflow):
            rebase(-1, 0)

    def test_scale_up_overflow(self) -> None:
        with pytest.raises(Overflow):
            rebase(10**30, 10)


# =============================================================================
# AMOUNT ↔ VALUE
# =============================================================================


class TestValueForTokens:
    """Тесты для value_for_tokens"""

    def test_usd_value_reference_scenario(self) -> None:
        """1.000000 токена по $25.00 (25×10^8, expo −8) → 25.000000 USD"""
        assert value_for_tokens(1_000_000, 6, 25 * 10**8, -8, 6) == 25_000_000

    def test_nine_decimal_token(self) -> None:
        """1 SOL (9 знаков) по $150.12345678 → $150.123456 (усечение)"""
        assert value_for_tokens(1_000_000_000, 9, 15_012_345_678, -8, 6) == 150_123_456

    def test_scale_up_branch(self) -> None:
        """Положительный сдвиг: 5 × 3 × 10^6"""
        assert value_for_tokens(5, 0, 3, 0, 6) == 15_000_000

    def test_zero_amount(self) -> None:
        assert value_for_tokens(0, 6, 25 * 10**8, -8, 6) == 0

    def test_zero_price_rejected(self) -> None:
        with pytest.raises(NonPositivePrice):
            value_for_tokens(1_000_000, 6, 0, -8, 6)

    def test_negative_price_rejected(self) -> None:
        with pytest.raises(NonPositivePrice):
            value_for_tokens(1_000_000, 6, -1, -8, 6)

    def test_result_exceeding_u64_overflows(self) -> None:
        """Результат больше u64 → Overflow, а не усечение"""
        with pytest.raises(Overflow):
            value_for_tokens(U64_MAX, 0, I64_MAX, 0, 0)

    def test_intermediate_exceeding_u128_overflows(self) -> None:
        with pytest.raises(Overflow):
            value_for_tokens(U64_MAX, 0, I64_MAX, 2, 0)

    def test_huge_exponent_overflows(self) -> None:
        """Степень десяти вне u128 → Overflow"""
        with pytest.raises(Overflow):
            value_for_tokens(1, 0, 1, 40, 0)

    def test_invalid_inputs_rejected(self) -> None:
        with pytest.raises(ValueError):
            value_for_tokens(-1, 6, 100, -2, 6)

        with pytest.raises(ValueError):
            value_for_tokens(1, 256, 100, -2, 6)


class TestTokensForValue:
    """Тесты для tokens_for_value"""

    def test_inverse_reference_scenario(self) -> None:
        """$25.000000 по $25.00 → 1.000000 токена"""
        assert tokens_for_value(25_000_000, 6, 25 * 10**8, -8, 6) == 1_000_000

    def test_negative_adjustment_moves_power_to_denominator(self) -> None:
        """$10 (6 знаков) по $2 → 5 токенов с 0 знаков"""
        assert tokens_for_value(10_000_000, 6, 2, 0, 0) == 5

    def test_different_token_and_value_decimals(self) -> None:
        """$150 по $150.00 → 1 токен с 9 знаками"""
        assert tokens_for_value(150_000_000, 6, 15_000_000_000, -8, 9) == 1_000_000_000

    def test_truncation(self) -> None:
        """$1 по $3 → 0.333333 токена (усечение)"""
        assert tokens_for_value(1_000_000, 6, 300, -2, 6) == 333_333

    def test_non_positive_price_rejected(self) -> None:
        with pytest.raises(NonPositivePrice):
            tokens_for_value(1_000_000, 6, 0, -8, 6)

        with pytest.raises(NonPositivePrice):
            tokens_for_value(1_000_000, 6, -5, -8, 6)

    def test_result_exceeding_u64_overflows(self) -> None:
        with pytest.raises(Overflow):
            tokens_for_value(U64_MAX, 0, 1, -8, 0)


# =============================================================================
# RATIO
# =============================================================================


class TestPriceRatio:
    """Тесты для price_ratio"""

    def test_same_exponent(self) -> None:
        """ETH $3000 / BTC $60000 = 0.050000"""
        assert price_ratio(300_000_000_000, -8, 6_000_000_000_000, -8, 6) == 50_000

    def test_different_exponents_aligned(self) -> None:
        """Тот же ratio при BTC с показателем −5"""
        assert price_ratio(300_000_000_000, -8, 6_000_000_000, -5, 6) == 50_000

    def test_negative_shift(self) -> None:
        """Отрицательный сдвиг: степень десяти уходит в знаменатель"""
        assert price_ratio(300_000_000_000, -8, 60_000, 0, 2) == 5
        assert price_ratio(300_000_000_000, -8, 60_000, 0, 0) == 0

    def test_non_positive_denominator_rejected(self) -> None:
        with pytest.raises(NonPositivePrice):
            price_ratio(100, -2, 0, -2, 6)

        with pytest.raises(NonPositivePrice):
            price_ratio(100, -2, -100, -2, 6)

    def test_negative_numerator_rejected(self) -> None:
        with pytest.raises(NegativePrice):
            price_ratio(-100, -2, 100, -2, 6)

    def test_ratio_overflow(self) -> None:
        with pytest.raises(Overflow):
            price_ratio(I64_MAX, 0, 1, 0, 6)


# =============================================================================
# BLEND
# =============================================================================


class TestWeightedBlend:
    """Тесты для weighted_blend"""

    def test_even_weight(self) -> None:
        assert weighted_blend(100, 200, 5_000) == 150

    def test_full_weights(self) -> None:
        """Вес 10000 → только p1, вес 0 → только p2"""
        assert weighted_blend(100, 200, 10_000) == 100
        assert weighted_blend(100, 200, 0) == 200

    def test_truncates_toward_zero(self) -> None:
        assert weighted_blend(100, 201, 5_000) == 150
        assert weighted_blend(-100, -201, 5_000) == -150

    def test_invalid_weight_rejected(self) -> None:
        with pytest.raises(InvalidWeight):
            weighted_blend(100, 200, -1)

        with pytest.raises(InvalidWeight):
            weighted_blend(100, 200, 10_001)

    def test_extreme_prices_do_not_overflow(self) -> None:
        """Широкий промежуточный тип: I64_MAX × 10000 не переполняется"""
        assert weighted_blend(I64_MAX, I64_MAX, 3_000) == I64_MAX


# =============================================================================
# CONFIDENCE RATIO
# =============================================================================


class TestConfidenceRatio:
    """Тесты для confidence_ratio_bps"""

    def test_reference_scenario(self) -> None:
        """50,000 × 10000 / 10,000,000 = 50 bps"""
        assert confidence_ratio_bps(10_000_000, 50_000) == 50

    def test_negative_price_uses_magnitude(self) -> None:
        assert confidence_ratio_bps(-10_000_000, 50_000) == 50

    def test_zero_price_is_maximum(self) -> None:
        """Нулевая цена → максимум u64, а не ошибка деления"""
        assert confidence_ratio_bps(0, 0) == U64_MAX
        assert confidence_ratio_bps(0, 1) == U64_MAX

    def test_saturates_at_u64_max(self) -> None:
        assert confidence_ratio_bps(1, U64_MAX) == U64_MAX


# =============================================================================
# ПРЕДСТАВЛЕНИЕ
# =============================================================================


class TestPresentation:
    """Тесты для to_decimal и format_usd"""

    def test_to_decimal(self) -> None:
        assert to_decimal(10_000_000, -8) == Decimal("0.1")
        assert to_decimal(25, 2) == Decimal("2500")
        assert to_decimal(-15, -1) == Decimal("-1.5")

    def test_format_usd_large(self) -> None:
        assert format_usd(Decimal("1234.5")) == "$1,234.50"
        assert format_usd(Decimal("1")) == "$1.00"

    def test_format_usd_small(self) -> None:
        """Значения меньше доллара — восемь знаков"""
        assert format_usd(Decimal("0.1")) == "$0.10000000"
        assert format_usd(Decimal("0.00012345")) == "$0.00012345"

    def test_format_usd_negative(self) -> None:
        assert format_usd(Decimal("-25")) == "-$25.00"

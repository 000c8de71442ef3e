"""
Property-Based Tests for price bounds and scale conversions

Инварианты, проверяемые через Hypothesis:
- lower <= mid <= upper для любых i64 price и u64 confidence
- sigma-масштабирование линейно растягивает полуширину
- amount → value → amount теряет не больше одной минимальной единицы
- отказ по confidence монотонен: больший confidence тоже отклоняется
- blend лежит между смешиваемыми ценами
"""

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from priceguard.core.domain import PriceSample, ValidationPolicy
from priceguard.core.math import SafePrice, tokens_for_value, value_for_tokens, weighted_blend
from priceguard.core.math.numerical_safeguards import I64_MAX, I64_MIN, U64_MAX
from priceguard.validator import PriceValidator

NOW = 1_700_000_000

# =============================================================================
# HYPOTHESIS STRATEGIES
# =============================================================================

i64_strategy = st.integers(min_value=I64_MIN, max_value=I64_MAX)
u64_strategy = st.integers(min_value=0, max_value=U64_MAX)

# Цены не ниже $1 при expo −8 и не выше $10,000
dollar_price_strategy = st.integers(min_value=10**8, max_value=10**12)

amount_strategy = st.integers(min_value=0, max_value=10**12)
weight_strategy = st.integers(min_value=0, max_value=10_000)
sigma_strategy = st.integers(min_value=0, max_value=10)


# =============================================================================
# SAFE PRICE
# =============================================================================


@settings(max_examples=200)
@given(price=i64_strategy, confidence=u64_strategy)
def test_bounds_always_ordered(price: int, confidence: int) -> None:
    """Границы упорядочены и остаются в i64 даже на краях диапазона"""
    safe = SafePrice.from_components(price, confidence, -8)

    assert I64_MIN <= safe.lower <= safe.mid <= safe.upper <= I64_MAX


@given(
    price=st.integers(min_value=-(10**12), max_value=10**12),
    confidence=st.integers(min_value=0, max_value=10**9),
    sigma=sigma_strategy,
)
def test_sigma_scales_half_width_linearly(price: int, confidence: int, sigma: int) -> None:
    """Без насыщения полуширина n-sigma границ равна n × confidence"""
    scaled = SafePrice.from_components(price, confidence, -8).price_with_sigma(sigma)

    assert scaled.mid == price
    assert scaled.upper - scaled.mid == sigma * confidence
    assert scaled.mid - scaled.lower == sigma * confidence


# =============================================================================
# SAFE MATH
# =============================================================================


@given(amount=amount_strategy, price=dollar_price_strategy)
def test_value_round_trip_loses_at_most_one_unit(amount: int, price: int) -> None:
    """amount → value → amount при равных decimals: усечение не больше 1 единицы"""
    value = value_for_tokens(amount, 6, price, -8, 6)
    tokens = tokens_for_value(value, 6, price, -8, 6)

    assert amount - 1 <= tokens <= amount


@given(p1=i64_strategy, p2=i64_strategy, weight=weight_strategy)
def test_blend_between_inputs(p1: int, p2: int, weight: int) -> None:
    blended = weighted_blend(p1, p2, weight)

    assert min(p1, p2) <= blended <= max(p1, p2)


# =============================================================================
# VALIDATOR
# =============================================================================


@given(
    price=st.integers(min_value=1, max_value=10**12),
    confidence=st.integers(min_value=0, max_value=10**12),
    extra=st.integers(min_value=0, max_value=10**12),
)
def test_confidence_rejection_monotonic(price: int, confidence: int, extra: int) -> None:
    """Если confidence c отклонён, то и c + k отклонён"""
    validator = PriceValidator(ValidationPolicy(max_age_seconds=60, max_confidence_ratio=100))

    narrow = PriceSample(price=price, confidence=confidence, exponent=-8, publish_time=NOW)
    wide = PriceSample(price=price, confidence=confidence + extra, exponent=-8, publish_time=NOW)

    assume(not validator.evaluate(narrow, NOW).accepted)
    assert not validator.evaluate(wide, NOW).accepted


@given(price=i64_strategy, confidence=u64_strategy)
def test_evaluate_deterministic(price: int, confidence: int) -> None:
    validator = PriceValidator(ValidationPolicy.lenient())
    sample = PriceSample(price=price, confidence=confidence, exponent=-8, publish_time=NOW)

    first = validator.evaluate(sample, NOW)
    second = validator.evaluate(sample, NOW)

    assert (first.accepted, first.stage, first.reject_reason, first.details) == (
        second.accepted,
        second.stage,
        second.reject_reason,
        second.details,
    )
    assert first.validated_price == second.validated_price

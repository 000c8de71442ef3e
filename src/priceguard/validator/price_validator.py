"""Price Validator — проверка сэмпла оракула по политике.

Порядок проверок (фиксированный):
1. Возраст: 0 <= now − publish_time <= max_age_seconds
2. Фид (если политика задаёт expected_feed_id): побайтовое совпадение
3. Confidence: conf × 10000 / |price| <= max_confidence_ratio
4. Clamp: min_price <= price <= max_price (для заданных границ)

Состояния: RECEIVED → AGE_CHECKED → FEED_CHECKED (опционально) →
CONFIDENCE_CHECKED → BOUNDS_CHECKED → VALIDATED, либо отказ на любом шаге.

Валидатор не хранит состояния между вызовами: для одинаковых
(sample, policy, now) результат всегда одинаков.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Optional

from priceguard.core.domain.feed_id import FeedIdentifier
from priceguard.core.domain.policy import ValidationPolicy
from priceguard.core.domain.price import PriceSample, ValidatedPrice
from priceguard.core.errors import (
    ConfidenceTooHigh,
    ErrorKind,
    FeedMismatch,
    PriceAboveMaximum,
    PriceBelowMinimum,
    PriceGuardError,
    StalePrice,
)
from priceguard.core.math.safe_math import confidence_ratio_bps

logger = logging.getLogger(__name__)


# =============================================================================
# STAGES
# =============================================================================


class ValidationStage(str, Enum):
    """Последняя пройденная стадия валидации."""

    RECEIVED = "RECEIVED"
    AGE_CHECKED = "AGE_CHECKED"
    FEED_CHECKED = "FEED_CHECKED"
    CONFIDENCE_CHECKED = "CONFIDENCE_CHECKED"
    BOUNDS_CHECKED = "BOUNDS_CHECKED"
    VALIDATED = "VALIDATED"


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class PriceValidationResult:
    """Результат валидации одного сэмпла."""

    accepted: bool
    stage: ValidationStage
    reject_reason: Optional[ErrorKind]
    error: Optional[PriceGuardError]
    validated_price: Optional[ValidatedPrice]

    # Детали
    details: str

    def unwrap(self) -> ValidatedPrice:
        """ValidatedPrice при успехе, иначе исходное исключение отказа"""
        if self.error is not None:
            raise self.error
        assert self.validated_price is not None
        return self.validated_price


# =============================================================================
# VALIDATOR
# =============================================================================


class PriceValidator:
    """Валидатор сэмплов оракула по ValidationPolicy."""

    def __init__(self, policy: Optional[ValidationPolicy] = None):
        """
        Args:
            policy: Политика валидации (default: ValidationPolicy.default())
        """
        self.policy = policy or ValidationPolicy.default()

    def evaluate(
        self,
        sample: PriceSample,
        now: int,
        feed_id: Optional[FeedIdentifier] = None,
    ) -> PriceValidationResult:
        """Оценка сэмпла без исключений для отказов политики.

        Args:
            sample: Сырой сэмпл оракула
            now: Доверенное текущее время (секунды, домен publish_time)
            feed_id: Идентификатор фида, из которого получен сэмпл

        Returns:
            PriceValidationResult с ValidatedPrice при успехе
        """
        stage = ValidationStage.RECEIVED

        try:
            for next_stage, check in self._pipeline(sample, now, feed_id):
                check()
                stage = next_stage
        except PriceGuardError as exc:
            logger.debug(
                "price rejected at %s: %s (%s)", stage.value, exc.kind.value, exc.message
            )
            return PriceValidationResult(
                accepted=False,
                stage=stage,
                reject_reason=exc.kind,
                error=exc,
                validated_price=None,
                details=f"Rejected after {stage.value}: {exc.message}",
            )

        validated = ValidatedPrice.from_sample(sample, feed_id)

        return PriceValidationResult(
            accepted=True,
            stage=ValidationStage.VALIDATED,
            reject_reason=None,
            error=None,
            validated_price=validated,
            details=(
                f"PASS: price={validated.price}e{validated.exponent}, "
                f"bounds=[{validated.lower_bound}, {validated.upper_bound}]"
            ),
        )

    def validate(
        self,
        sample: PriceSample,
        now: int,
        feed_id: Optional[FeedIdentifier] = None,
    ) -> ValidatedPrice:
        """Валидация сэмпла.

        Raises:
            StalePrice, FeedMismatch, ConfidenceTooHigh,
            PriceBelowMinimum, PriceAboveMaximum: при отказе политики
        """
        return self.evaluate(sample, now, feed_id).unwrap()

    # -------------------------------------------------------------------------
    # CHECKS
    # -------------------------------------------------------------------------

    def _pipeline(
        self,
        sample: PriceSample,
        now: int,
        feed_id: Optional[FeedIdentifier],
    ) -> Iterator[tuple[ValidationStage, Callable[[], None]]]:
        yield ValidationStage.AGE_CHECKED, lambda: self.check_age(sample, now)

        if self.policy.expected_feed_id is not None:
            yield ValidationStage.FEED_CHECKED, lambda: self.check_feed(feed_id)

        yield ValidationStage.CONFIDENCE_CHECKED, lambda: self.check_confidence(sample)
        yield ValidationStage.BOUNDS_CHECKED, lambda: self.check_bounds(sample)

    def check_age(self, sample: PriceSample, now: int) -> None:
        age = sample.age(now)

        if age < 0:
            raise StalePrice(
                f"publish_time {sample.publish_time} is {-age}s in the future of now={now}"
            )
        if age > self.policy.max_age_seconds:
            raise StalePrice(f"price age {age}s exceeds max {self.policy.max_age_seconds}s")

    def check_feed(self, feed_id: Optional[FeedIdentifier]) -> None:
        expected = self.policy.expected_feed_id
        if expected is None:
            return

        if feed_id is None:
            raise FeedMismatch(f"expected feed {expected}, sample has no feed id")
        if feed_id.value != expected.value:
            raise FeedMismatch(f"expected feed {expected}, got {feed_id}")

    def check_confidence(self, sample: PriceSample) -> None:
        ratio = confidence_ratio_bps(sample.price, sample.confidence)

        if ratio > self.policy.max_confidence_ratio:
            raise ConfidenceTooHigh(
                f"confidence ratio {ratio} bps exceeds max {self.policy.max_confidence_ratio} bps "
                f"(price={sample.price}, conf={sample.confidence})"
            )

    def check_bounds(self, sample: PriceSample) -> None:
        if self.policy.min_price is not None and sample.price < self.policy.min_price:
            raise PriceBelowMinimum(
                f"price {sample.price} below minimum {self.policy.min_price}"
            )
        if self.policy.max_price is not None and sample.price > self.policy.max_price:
            raise PriceAboveMaximum(
                f"price {sample.price} above maximum {self.policy.max_price}"
            )


def validate_price(
    sample: PriceSample,
    policy: ValidationPolicy,
    now: int,
    feed_id: Optional[FeedIdentifier] = None,
) -> ValidatedPrice:
    """Валидация сэмпла по политике (см. PriceValidator.validate)."""
    return PriceValidator(policy).validate(sample, now, feed_id)
